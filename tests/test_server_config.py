from fractalnet.server_config import (
    DEFAULT_HEIGHT,
    DEFAULT_PORT,
    DEFAULT_SERVER_ADDRESS,
    DEFAULT_WIDTH,
    ServerConfig,
    load_server_config,
    parse_server_config,
)


def test_defaults_match_source_values():
    config = parse_server_config("")
    assert config == ServerConfig("localhost", "8787", 400, 400)


def test_full_document():
    text = """
[server]
server_address = "10.0.0.5"
port = "9000"

[display]
width = 640
height = 480
"""
    assert parse_server_config(text) == ServerConfig("10.0.0.5", "9000", 640, 480)


def test_missing_fields_take_defaults():
    text = '[server]\nport = "9999"\n[display]\nheight = 123\n'
    config = parse_server_config(text)
    assert config.server_address == DEFAULT_SERVER_ADDRESS
    assert config.port == "9999"
    assert config.width == DEFAULT_WIDTH
    assert config.height == 123


def test_missing_display_table():
    config = parse_server_config('[server]\nserver_address = "example.com"\n')
    assert config.server_address == "example.com"
    assert (config.width, config.height) == (DEFAULT_WIDTH, DEFAULT_HEIGHT)


def test_invalid_toml_gives_defaults():
    assert parse_server_config("this is = = not toml") == ServerConfig()


def test_out_of_range_width_rejects_whole_document():
    text = '[server]\nport = "1234"\n[display]\nwidth = 70000\n'
    assert parse_server_config(text) == ServerConfig()


def test_wrong_type_rejects_whole_document():
    text = '[server]\nport = 1234\n'
    assert parse_server_config(text).port == DEFAULT_PORT


def test_load_uses_first_readable_file(tmp_path):
    first = tmp_path / "first.toml"
    second = tmp_path / "second.toml"
    second.write_text('[server]\nport = "1111"\n', encoding="utf-8")
    first.write_text('[server]\nport = "2222"\n', encoding="utf-8")
    missing = tmp_path / "missing.toml"
    assert load_server_config([missing, first, second]).port == "2222"
    assert load_server_config([missing, second, first]).port == "1111"


def test_load_without_files_gives_defaults(tmp_path):
    assert load_server_config([tmp_path / "nope.toml"]) == ServerConfig()