import pytest

from mappinglint.builder.core import ModelBuilder
from mappinglint.catalog import TypeCatalog
from mappinglint.configuration import MarkerNames
from mappinglint.errors import UnsupportedPropertyKindError
from mappinglint.model import AnnotationInstance, Declaration, Property, PropertyKind, ref
from mappinglint.resolver.annotation import attribute_value, find_annotation
from mappinglint.resolver.collection import collection_element_type
from mappinglint.resolver.property import decapitalize, property_name, property_type


def _accessor(name: str) -> Property:
    return Property(name, PropertyKind.ACCESSOR, ref("shop.Parent"))


class TestPropertyName:
    """Tests for canonical property names"""

    def test_field_name_is_verbatim(self) -> None:
        assert property_name(Property("getParent", PropertyKind.FIELD, None)) == "getParent"

    def test_get_prefix_is_stripped(self) -> None:
        assert property_name(_accessor("getParent")) == "parent"
        assert property_name(_accessor("getParentOrder")) == "parentOrder"

    def test_is_prefix_is_stripped(self) -> None:
        assert property_name(_accessor("isActive")) == "active"

    def test_non_conventional_accessor_keeps_its_name(self) -> None:
        assert property_name(_accessor("parent")) == "parent"
        assert property_name(_accessor("owner")) == "owner"

    def test_prefix_is_matched_literally(self) -> None:
        # "issuer" starts with "is" and is treated like any other accessor
        assert property_name(_accessor("issuer")) == "suer"
        assert property_name(_accessor("get")) == ""

    def test_acronyms_are_not_decapitalized(self) -> None:
        assert property_name(_accessor("getURL")) == "URL"
        assert property_name(_accessor("getX")) == "x"

    def test_unsupported_kind_raises(self) -> None:
        prop = Property("parent", "method", ref("shop.Parent"))  # type: ignore[arg-type]

        with pytest.raises(UnsupportedPropertyKindError, match="unsupported kind"):
            property_name(prop)


class TestDecapitalize:
    """Tests for the decapitalize helper"""

    def test_decapitalize(self) -> None:
        assert decapitalize("Parent") == "parent"
        assert decapitalize("parent") == "parent"
        assert decapitalize("P") == "p"
        assert decapitalize("") == ""
        assert decapitalize("ID") == "ID"


class TestPropertyType:
    """Tests for property types"""

    def test_field_type(self) -> None:
        assert property_type(Property("parent", PropertyKind.FIELD, ref("shop.Parent"))) == ref(
            "shop.Parent"
        )

    def test_accessor_return_type(self) -> None:
        assert property_type(_accessor("getParent")) == ref("shop.Parent")

    def test_unsupported_kind_raises(self) -> None:
        prop = Property("parent", "constructor", ref("shop.Parent"))  # type: ignore[arg-type]

        with pytest.raises(UnsupportedPropertyKindError):
            property_type(prop)


class TestAnnotationInspector:
    """Tests for find_annotation() and attribute_value()"""

    def test_finds_annotation_of_type(self) -> None:
        one_to_many = AnnotationInstance.of("persistence.OneToMany", mappedBy="parent")
        prop = Property(
            "children",
            PropertyKind.FIELD,
            None,
            [AnnotationInstance.of("persistence.Column"), one_to_many],
        )

        assert find_annotation(prop, ref("persistence.OneToMany")) is one_to_many

    def test_first_match_wins(self) -> None:
        first = AnnotationInstance.of("persistence.Entity", name="first")
        second = AnnotationInstance.of("persistence.Entity", name="second")
        declaration = Declaration("shop.Parent", annotations=[first, second])

        assert find_annotation(declaration, ref("persistence.Entity")) is first

    def test_absent_annotation(self) -> None:
        declaration = Declaration("shop.Parent")

        assert find_annotation(declaration, ref("persistence.Entity")) is None

    def test_attribute_value(self) -> None:
        annotation = AnnotationInstance.of("persistence.OneToMany", mappedBy="parent")

        value = attribute_value(annotation, "mappedBy")
        assert value is not None
        assert value.as_string() == "parent"
        assert attribute_value(annotation, "cascade") is None


class TestCollectionElementType:
    """Tests for collection_element_type()"""

    @pytest.fixture
    def catalog_and_model(self, builder: ModelBuilder, names: MarkerNames):
        builder.declaration("shop.Child")
        builder.declaration("shop.Bag").extends(ref(names.collection))
        builder.declaration("shop.Children").extends(ref(names.collection, ref("shop.Child")))
        model = builder.build()
        return TypeCatalog(model, names), model

    def test_element_type_of_parameterized_collection(self, catalog_and_model) -> None:
        catalog, model = catalog_and_model

        element = collection_element_type(model, catalog, ref("builtins.set", ref("shop.Child")))
        assert element == ref("shop.Child")

    def test_element_type_of_generic_subtype(self, catalog_and_model) -> None:
        catalog, model = catalog_and_model

        element = collection_element_type(model, catalog, ref("shop.Bag", ref("shop.Child")))
        assert element == ref("shop.Child")

    def test_absent_type(self, catalog_and_model) -> None:
        catalog, model = catalog_and_model

        assert collection_element_type(model, catalog, None) is None

    def test_non_collection_type(self, catalog_and_model) -> None:
        catalog, model = catalog_and_model

        assert collection_element_type(model, catalog, ref("shop.Child")) is None

    def test_raw_collection_type(self, catalog_and_model) -> None:
        catalog, model = catalog_and_model

        assert collection_element_type(model, catalog, ref("builtins.list")) is None

    def test_element_type_fixed_by_supertype_is_not_recovered(self, catalog_and_model) -> None:
        catalog, model = catalog_and_model

        assert collection_element_type(model, catalog, ref("shop.Children")) is None
