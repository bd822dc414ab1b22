from streamkit.config import DownloadSpeedColumn, ParserConfig


def test_parser_config_stores_values():
    config = ParserConfig(
        url="https://media.example.com/a.m3u8",
        original_url="https://media.example.com/orig.m3u8",
        base_url="https://media.example.com/",
        headers={"User-Agent": "agent"},
    )
    assert config.headers == {"User-Agent": "agent"}
    assert config.base_url == "https://media.example.com/"
    assert config == ParserConfig(
        "https://media.example.com/a.m3u8",
        "https://media.example.com/orig.m3u8",
        "https://media.example.com/",
        {"User-Agent": "agent"},
    )


def test_parser_config_headers_not_shared():
    first = ParserConfig()
    second = ParserConfig()
    first.headers["Referer"] = "https://media.example.com/"
    assert second.headers == {}
    assert first.url == ""


def test_download_speed_column_defaults_not_shared():
    first = DownloadSpeedColumn()
    second = DownloadSpeedColumn(stop_speed=5)
    first.date_time_string_dic[1] = "12:00:00"
    assert second.date_time_string_dic == {}
    assert (first.stop_speed, first.no_wrap) == (0, False)
    assert second.stop_speed == 5