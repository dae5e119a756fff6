from pychip8.io import KEY_COUNT, KEYMAP_TEMPLATE, Keypad


def test_keymap_covers_all_sixteen_keys() -> None:
    assert sorted(KEYMAP_TEMPLATE.values()) == list(range(KEY_COUNT))


def test_press_and_release_by_index() -> None:
    keypad = Keypad()

    keypad.press(0xA)
    assert keypad.is_pressed(0xA)
    assert keypad.first_pressed() == 0xA

    keypad.release(0xA)
    assert not keypad.is_pressed(0xA)
    assert keypad.first_pressed() is None


def test_press_by_host_key_name() -> None:
    keypad = Keypad()

    keypad.press("Q")
    keypad.press("x")

    assert keypad.is_pressed(0x4)
    assert keypad.is_pressed(0x0)
    assert keypad.first_pressed() == 0x0


def test_unmapped_names_are_ignored() -> None:
    keypad = Keypad()

    keypad.press("p")
    keypad.release("p")

    assert keypad.snapshot() == (False,) * KEY_COUNT


def test_key_stays_down_until_every_press_is_released() -> None:
    keypad = Keypad()
    keypad.press("x")
    keypad.press(0x0)

    keypad.release("x")
    assert keypad.is_pressed(0x0)

    keypad.release(0x0)
    assert not keypad.is_pressed(0x0)


def test_listeners_fire_on_edges_only() -> None:
    keypad = Keypad()
    events = []
    keypad.add_listener(lambda key, pressed: events.append((key, pressed)))

    keypad.press(5)
    keypad.press(5)
    keypad.release(5)
    keypad.release(5)

    assert events == [(5, True), (5, False)]


def test_reset_clears_everything() -> None:
    keypad = Keypad()
    keypad.press(1)
    keypad.press(2)

    keypad.reset()

    assert keypad.first_pressed() is None
