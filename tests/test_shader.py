import pytest

from liveascii.shader import CharShader, ShaderManager, TextShader


def test_default_first_shader_is_ascii_ramp():
    manager = ShaderManager()
    assert manager.current_shader() == CharShader(
        (" ", ".", ":", "-", "=", "+", "*", "#", "%", "@")
    )


def test_next_selects_text_shader():
    manager = ShaderManager()
    manager.next()
    assert manager.current_shader() == TextShader("HELLO")


def test_next_wraps_around():
    manager = ShaderManager()
    first = manager.current_shader()
    for _ in range(len(manager.shaders)):
        manager.next()
    assert manager.current_shader() == first


def test_prev_from_start_goes_to_last():
    manager = ShaderManager()
    manager.prev()
    assert manager.current_shader() == manager.shaders[-1]
    assert manager.current_shader().chars[-1] == "⣿"


def test_prev_undoes_next():
    manager = ShaderManager()
    manager.next()
    manager.next()
    manager.prev()
    assert manager.current_shader() == TextShader("HELLO")


def test_insert_hd_puts_shader_in_front():
    manager = ShaderManager()
    custom = CharShader("ab")
    manager.insert_hd(custom)
    assert manager.shaders[0] == custom
    assert manager.current_shader() == custom
    assert len(manager.shaders) == 4


def test_char_shader_stores_tuple():
    assert CharShader(["x", "y"]).chars == ("x", "y")


def test_custom_ring():
    manager = ShaderManager([TextShader("A"), TextShader("B")])
    manager.next()
    manager.next()
    assert manager.current_shader() == TextShader("A")


def test_empty_ring_rejected():
    with pytest.raises(ValueError):
        ShaderManager([])