import pytest

from json_schema_serializers import DeclarationError, Serializer


class TestKeyTransforms:
    """Test output key transforms"""

    def test_context_method_transform(self):
        def build(d):
            d.transform_keys("upcase_keys")
            d.attribute("first_name", "string")

            @d.method
            def upcase_keys(ctx, key):
                return key.upper() if ctx.options.get("upcase") else key

        serializer = Serializer.extend(build)
        value = {"first_name": "joe"}

        assert serializer.serialize(value, {"upcase": False}) == {"first_name": "joe"}
        assert serializer.serialize(value, {"upcase": True}) == {"FIRST_NAME": "joe"}
        # call-time dependent, the schema keeps the declared names
        assert list(serializer.schema()["properties"]) == ["first_name"]

    def test_callable_transform(self):
        def build(d):
            d.transform_keys(lambda key: f"x_{key}")
            d.attribute("name", "string")

        serializer = Serializer.extend(build)

        assert serializer.serialize({"name": "joe"}) == {"x_name": "joe"}
        assert serializer.schema()["required"] == ["x_name"]

    def test_str_method_transform(self):
        def build(d):
            d.transform_keys("upper")
            d.attribute("name", "string")

        serializer = Serializer.extend(build)

        assert serializer.serialize({"name": "joe"}) == {"NAME": "joe"}
        assert list(serializer.schema()["properties"]) == ["NAME"]

    def test_key_inflection(self):
        def build(d):
            d.key_inflection("camel_lower")
            d.attribute("first_name", "string")
            d.attribute("last_name", "string?", source="surname")

        serializer = Serializer.extend(build)
        schema = serializer.schema()

        assert serializer.serialize({"first_name": "Ada", "surname": None}) == {"firstName": "Ada", "lastName": None}
        assert list(schema["properties"]) == ["firstName", "lastName"]
        assert schema["required"] == ["firstName", "lastName"]

    @pytest.mark.parametrize(
        "inflection, expected",
        [
            ("camel", "FirstName"),
            ("camel_lower", "firstName"),
            ("dash", "first-name"),
            ("underscore", "first_name"),
            ("unaltered", "first_name"),
        ],
    )
    def test_inflections(self, inflection, expected):
        def build(d):
            d.key_inflection(inflection)
            d.attribute("first_name", "string")

        assert Serializer.extend(build).serialize({"first_name": "Ada"}) == {expected: "Ada"}

    def test_unknown_inflection(self):
        with pytest.raises(DeclarationError, match="Unknown key inflection"):
            Serializer.extend(lambda d: d.key_inflection("shout"))

    def test_attribute_key_transform(self):
        def build(d):
            d.key_inflection("camel_lower")
            d.attribute("first_name", "string")
            d.attribute("id_number", "integer", key_transform=str.upper)

        serializer = Serializer.extend(build)
        assert serializer.serialize({"first_name": "Ada", "id_number": 1}) == {"firstName": "Ada", "ID_NUMBER": 1}

    def test_nested_definitions_inherit_transform(self):
        def build(d):
            d.key_inflection("camel_lower")

            @d.hash_attribute("home_address")
            def home_address(h):
                h.attribute("zip_code", "string")

        serializer = Serializer.extend(build)
        assert serializer.serialize({"home_address": {"zip_code": "75001"}}) == {"homeAddress": {"zipCode": "75001"}}
