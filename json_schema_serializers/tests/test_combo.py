from types import SimpleNamespace as Obj

import pytest

from json_schema_serializers import ComboSerializer, DeclarationError, Serializer


def one_two_options(c):
    @c.option("one")
    def one(h):
        h.attribute("one", "string")

    @c.option("two")
    def two(h):
        h.attribute("two", "integer")


class TestOneOf:
    def test_schema(self):
        serializer = Serializer.extend(lambda d: d.one_of(one_two_options))
        schema = serializer.schema()

        assert list(schema) == ["oneOf"]
        assert list(schema["oneOf"][0]["properties"]) == ["one"]
        assert list(schema["oneOf"][1]["properties"]) == ["two"]

    def test_any_of_schema(self):
        serializer = Serializer.extend(lambda d: d.any_of(one_two_options))
        assert len(serializer.schema()["anyOf"]) == 2

    def test_selector(self):
        def build(d):
            @d.one_of
            def combo(c):
                one_two_options(c)
                c.selector(lambda value, options: "one" if options.get("one") else "two")

        serializer = Serializer.extend(build)

        assert serializer.serialize({"one": "foo"}, {"one": True}) == {"one": "foo"}
        assert serializer.serialize(Obj(two=2), {"one": False}) == {"two": 2}

    def test_missing_selector(self):
        serializer = Serializer.extend(lambda d: d.one_of(one_two_options))

        with pytest.raises(DeclarationError, match="Must define a selector to use one_of serializer"):
            serializer.serialize({"one": "foo"})

    def test_unknown_selection(self):
        def build(d):
            @d.one_of
            def combo(c):
                one_two_options(c)
                c.selector(lambda value, options: "three")

        serializer = Serializer.extend(build)

        with pytest.raises(DeclarationError, match=r"Declared options are: \['one', 'two'\]"):
            serializer.serialize({"one": "foo"})

    def test_alias_options(self):
        def build(d):
            @d.one_of
            def combo(c):
                c.option("text", "string")
                c.option("number", "integer")
                c.selector(lambda value, options: "text" if isinstance(value, str) else "number")

        serializer = Serializer.extend(build)

        assert serializer.schema() == {"oneOf": [{"type": "string"}, {"type": "integer"}]}
        assert serializer.serialize("foo") == "foo"
        assert serializer.serialize(3.0) == 3

    def test_optional_combo(self):
        def build(d):
            @d.one_of
            def combo(c):
                c.option("text", "string")
                c.selector(lambda value, options: "text")

        schema = Serializer.extend(build).optional().schema()
        assert schema == {"oneOf": [{"type": "null"}, {"oneOf": [{"type": "string"}]}]}

    def test_named_combo_expands_to_its_options(self):
        def build_shape(d):
            d.defines("Shape")
            d.one_of(one_two_options)

        shape = Serializer.extend(build_shape)
        holder = Serializer.extend(lambda d: d.attribute("shape", shape))

        assert shape.schema({"use_refs": True})["oneOf"][0]["properties"]["one"] == {"type": "string"}
        assert list(holder.schema()["properties"]["shape"]) == ["oneOf"]
        assert holder.schema({"use_refs": False})["properties"]["shape"]["oneOf"][0]["type"] == "object"
        assert shape.schema()["oneOf"][1]["properties"]["two"] == {"type": "integer"}

    def test_named_options_are_referenced(self):
        def build_user(d):
            d.defines("User")
            d.attribute("name", "string")

        user = Serializer.extend(build_user)

        def build(d):
            @d.one_of
            def combo(c):
                c.option("user", user)
                c.option("text", "string")
                c.selector(lambda value, options: "text" if isinstance(value, str) else "user")

        serializer = Serializer.extend(build)

        assert serializer.schema({"use_refs": True})["oneOf"][0] == {"$ref": "#/definitions/User"}
        assert serializer.schema()["oneOf"][0] == {"$ref": "#/definitions/User"}
        assert serializer.schema({"use_refs": False})["oneOf"][0]["type"] == "object"


class TestAllOf:
    def test_merges_outputs(self):
        serializer = Serializer.extend(lambda d: d.all_of(one_two_options))

        assert serializer.serialize({"one": "foo", "two": 2}) == {"one": "foo", "two": 2}
        assert len(serializer.schema()["allOf"]) == 2

    def test_later_options_win(self):
        def build(d):
            @d.all_of
            def combo(c):
                c.option("first", build=lambda h: h.attribute("name", "string", source="first"))
                c.option("second", build=lambda h: h.attribute("name", "string", source="second"))

        serializer = Serializer.extend(build)
        assert serializer.serialize({"first": "a", "second": "b"}) == {"name": "b"}

    def test_selector_is_not_supported(self):
        def build(d):
            @d.all_of
            def combo(c):
                one_two_options(c)
                c.selector(lambda value, options: "one")

        with pytest.raises(DeclarationError, match="not supported for `all_of`"):
            Serializer.extend(build)


class TestDeclarationErrors:
    def test_only_one_combo(self):
        def build(d):
            d.one_of(one_two_options)
            d.any_of(one_two_options)

        with pytest.raises(DeclarationError, match="Can only define one of"):
            Serializer.extend(build)

    def test_at_least_one_option(self):
        with pytest.raises(DeclarationError, match="Must define at least one `option`"):
            Serializer.extend(lambda d: d.one_of(lambda c: None))

    def test_duplicate_option(self):
        def build(d):
            @d.one_of
            def combo(c):
                c.option("text", "string")
                c.option("text", "integer")

        with pytest.raises(DeclarationError, match="declared twice"):
            Serializer.extend(build)

    def test_invalid_kind(self):
        with pytest.raises(DeclarationError, match="Invalid combo serializer type"):
            ComboSerializer("some_of", {})

    def test_options_do_not_inherit_attributes(self):
        def build(d):
            d.attribute("ignored", "string")

            @d.one_of
            def combo(c):
                c.option("only", build=lambda h: h.attribute("only", "string"))
                c.selector(lambda value, options: "only")

        serializer = Serializer.extend(build)
        assert serializer.serialize({"only": "x", "ignored": "y"}) == {"only": "x"}
