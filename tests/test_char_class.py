from be20kit.char_class import CharClass


def test_char_class_counts():
    c = CharClass()
    c.add(ord("a"))
    c.add(ord("0"))
    assert c.range_A_Fi == 1
    assert c.range_g_z == 0
    assert c.range_G_Z == 0
    assert c.range_0_9 == 1

    c.add(b"ab")
    assert c.range_A_Fi == 3
    assert c.range_g_z == 0
    assert c.range_G_Z == 0
    assert c.range_0_9 == 1


def test_char_class_string_input():
    c = CharClass()
    c.add("Fz9G!")
    assert c.range_A_Fi == 1
    assert c.range_g_z == 1
    assert c.range_G_Z == 1
    assert c.range_0_9 == 1


def test_char_class_ignores_other_bytes():
    c = CharClass()
    c.add(bytes(range(0, 0x30)) + bytes(range(0x80, 0x100)))
    assert c == CharClass()


def test_char_class_upper_hex():
    c = CharClass()
    c.add(b"ABCDEF")
    assert c.range_A_Fi == 6
    assert c.range_G_Z == 0