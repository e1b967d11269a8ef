import pytest

from jclassparse.descriptors import (
    BaseType,
    ClassName,
    FieldDescriptor,
    MethodDescriptor,
    ObjectType,
    is_array_descriptor,
    is_field_descriptor,
    is_method_descriptor,
    is_return_descriptor,
    parse_array_descriptor,
    parse_field_descriptor,
    parse_method_descriptor,
    parse_return_descriptor,
    return_byte_len,
)
from jclassparse.errors import ParseError


def _obj(name):
    return ObjectType(ClassName(name))


@pytest.mark.parametrize("text", ["I", "[Ljava;", "[Ljava/lang/Object;", "[[Z"])
def test_valid_field_descriptors(text):
    assert is_field_descriptor(text) is True


@pytest.mark.parametrize(
    "text",
    [
        "M",
        "[[L;",
        "[[Ljava/;",
        "[[L/java;",
        "[[Ljava",
        "[[Ljava/lang/Object;stuff",
        "Istuff",
    ],
)
def test_invalid_field_descriptors(text):
    assert is_field_descriptor(text) is False


@pytest.mark.parametrize(
    "text",
    [
        "()V",
        "(II)V",
        "([Ljava/lang/Object;)V",
        "(Ljava/lang/Object;I)V",
        "()Ljava/lang/Obejct;",
        "()I",
    ],
)
def test_valid_method_descriptors(text):
    assert is_method_descriptor(text) is True


@pytest.mark.parametrize(
    "text", ["(V)V", "(", ")", "()", "()VV", "()II", "()ILjava/lang/Object;"]
)
def test_invalid_method_descriptors(text):
    assert is_method_descriptor(text) is False


def test_void_void():
    desc = parse_method_descriptor("()V", 0)
    assert desc.parameters == ()
    assert desc.return_type is None
    assert str(desc) == "()V"


def test_single_param():
    desc = parse_method_descriptor("(J)V", 0)
    assert desc.parameters == (FieldDescriptor(0, BaseType.LONG),)
    assert desc.return_type is None
    assert str(desc) == "(J)V"


def test_basetype_return():
    desc = parse_method_descriptor("()J", 0)
    assert desc.parameters == ()
    assert desc.return_type == FieldDescriptor(0, BaseType.LONG)
    assert str(desc) == "()J"


def test_all_basetype_params():
    desc = parse_method_descriptor("(BCDFIJSZ)V", 0)
    assert desc.parameters == tuple(
        FieldDescriptor(0, t)
        for t in (
            BaseType.BYTE,
            BaseType.CHAR,
            BaseType.DOUBLE,
            BaseType.FLOAT,
            BaseType.INTEGER,
            BaseType.LONG,
            BaseType.SHORT,
            BaseType.BOOLEAN,
        )
    )
    assert desc.return_type is None
    assert str(desc) == "(BCDFIJSZ)V"


def test_object_param():
    desc = parse_method_descriptor("(Ljava/lang/Object;)V", 0)
    assert desc.parameters == (FieldDescriptor(0, _obj("java/lang/Object")),)
    assert desc.return_type is None
    assert str(desc) == "(Ljava/lang/Object;)V"


def test_multi_object_param():
    text = "(Ljava/lang/Object;Ljava/lang/String;)V"
    desc = parse_method_descriptor(text, 0)
    assert desc.parameters == (
        FieldDescriptor(0, _obj("java/lang/Object")),
        FieldDescriptor(0, _obj("java/lang/String")),
    )
    assert desc.return_type is None
    assert str(desc) == text


def test_object_return():
    desc = parse_method_descriptor("()Ljava/lang/Object;", 0)
    assert desc.parameters == ()
    assert desc.return_type == FieldDescriptor(0, _obj("java/lang/Object"))
    assert str(desc) == "()Ljava/lang/Object;"


def test_array_basetype_param():
    desc = parse_method_descriptor("([J)V", 0)
    assert desc.parameters == (FieldDescriptor(1, BaseType.LONG),)
    assert desc.return_type is None


def test_multi_array_param():
    desc = parse_method_descriptor("([[J)V", 0)
    assert desc.parameters == (FieldDescriptor(2, BaseType.LONG),)
    assert desc.return_type is None
    assert str(desc) == "([[J)V"


def test_array_return():
    desc = parse_method_descriptor("()[J", 0)
    assert desc.parameters == ()
    assert desc.return_type == FieldDescriptor(1, BaseType.LONG)
    assert str(desc) == "()[J"


def test_max_array_depth():
    ok = parse_method_descriptor("(" + "[" * 255 + "J)V", 0)
    assert ok.parameters[0].dimensions == 255
    with pytest.raises(ParseError) as info:
        parse_method_descriptor("(" + "[" * 256 + "J)V", 0)
    assert info.value.msg == "Dimensions in field descriptor exceeded allowed limit"


def test_classname_parse_accepts_valid():
    assert ClassName.parse("java/lang/Object") == "java/lang/Object"


@pytest.mark.parametrize(
    "text",
    ["/bad/classname", "another//bad/one", "yet/another/bad/one;", "also/bogus;one", "Ldefinitely/not/ok;"],
)
def test_classname_parse_rejects_invalid(text):
    with pytest.raises(ParseError):
        ClassName.parse(text)


def test_classname_semicolon_message():
    with pytest.raises(ParseError) as info:
        ClassName.parse("also/bogus;one")
    assert info.value.msg == "Disallowed ';' in class name"


def test_segment_disallowed_character_message():
    with pytest.raises(ParseError) as info:
        ClassName.parse("java.lang.Object")
    assert info.value.msg == "Disallowed character in unqualified segment"


def test_unterminated_class_descriptor():
    with pytest.raises(ParseError) as info:
        parse_field_descriptor("Ljava/lang/Object", 0)
    assert info.value.msg == "Unterminated unqualified segment"


def test_empty_field_descriptor():
    with pytest.raises(ParseError) as info:
        parse_field_descriptor("", 0)
    assert info.value.msg == "Empty string is not a field descriptor"


def test_method_descriptor_must_start_with_paren():
    with pytest.raises(ParseError) as info:
        parse_method_descriptor(")", 0)
    assert info.value.msg == "Method descriptor must start with '('"


def test_field_descriptor_at_offset_ignores_trailing():
    desc = parse_field_descriptor("xxLjava/lang/Object;rest", 2)
    assert desc == FieldDescriptor(0, _obj("java/lang/Object"))


@pytest.mark.parametrize(
    "text", ["()V", "(BCDFIJSZ)V", "(Ljava/lang/Object;Ljava/lang/String;)V", "([[J)[Ljava/lang/Object;"]
)
def test_method_byte_len_matches_text(text):
    desc = parse_method_descriptor(text, 0)
    assert desc.byte_len() == len(text.encode("utf-8"))
    assert parse_method_descriptor(str(desc), 0) == desc


def test_byte_len_counts_utf8_bytes():
    text = "[Lpkg/Caf\u00e9;"
    desc = parse_field_descriptor(text, 0)
    assert desc.byte_len() == len(text.encode("utf-8"))
    assert is_field_descriptor(text) is True


def test_return_byte_len_void_and_field():
    assert return_byte_len(None) == len("V")
    field = parse_field_descriptor("[I", 0)
    assert return_byte_len(field) == field.byte_len()


def test_parse_return_descriptor():
    assert parse_return_descriptor("V", 0) is None
    assert parse_return_descriptor("Z", 0) == FieldDescriptor(0, BaseType.BOOLEAN)


@pytest.mark.parametrize("text,expected", [("V", True), ("I", True), ("[Ljava;", True), ("VV", False), ("", False)])
def test_is_return_descriptor(text, expected):
    assert is_return_descriptor(text) is expected


def test_array_descriptor_helpers():
    assert parse_array_descriptor("java/lang/Object") is None
    assert parse_array_descriptor("") is None
    assert parse_array_descriptor("[Lsome/package/Class;") == FieldDescriptor(
        1, _obj("some/package/Class")
    )
    with pytest.raises(ParseError) as info:
        parse_array_descriptor("[Iextra")
    assert info.value.msg == "Not a field descriptor"
    assert is_array_descriptor("[[Z") is True
    assert is_array_descriptor("I") is False


def test_descriptors_are_hashable_and_comparable():
    a = parse_method_descriptor("(I)V", 0)
    b = parse_method_descriptor("(I)V", 0)
    assert a == b
    assert len({a, b}) == 1
    assert a == MethodDescriptor((FieldDescriptor(0, BaseType.INTEGER),), None)