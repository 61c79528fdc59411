from iptv_catalog.services.playlist_parser_service import (
    iter_playlist,
    parse_extinf_line,
    parse_playlist,
)


def test_parses_entry_with_defaults_for_unset_fields():
    content = "#EXTM3U\n#EXTINF:-1,Plain Channel\nhttp://streams.example/plain.m3u8\n"

    records = parse_playlist(content)

    assert len(records) == 1
    record = records[0]
    assert record.name == "Plain Channel"
    assert record.stream_url == "http://streams.example/plain.m3u8"
    assert record.category == "General"
    assert record.country == "Unknown"
    assert record.country_code == "xx"
    assert record.language == "en"
    assert record.logo is None
    assert record.description is None
    assert record.is_online is True


def test_extracts_quoted_attributes():
    line = (
        '#EXTINF:-1 tvg-id="1TV.af@SD" tvg-name="One TV" tvg-logo="https://logo.example/1tv.png" '
        'tvg-country="AF" tvg-language="Dari" group-title="Entertainment",1TV'
    )

    entry = parse_extinf_line(line)

    assert entry.name == "1TV"
    assert entry.tvg_id == "1TV.af@SD"
    assert entry.tvg_name == "One TV"
    assert entry.logo == "https://logo.example/1tv.png"
    assert entry.country_hint == "AF"
    assert entry.language == "Dari"
    assert entry.group_title == "Entertainment"


def test_explicit_attributes_override_defaults():
    content = (
        '#EXTINF:-1 tvg-language="French" group-title="Movies" tvg-logo="https://logo.example/a.png",Cine A\n'
        "https://streams.example/a.m3u8\n"
    )

    record = parse_playlist(content)[0]

    assert record.category == "Movies"
    assert record.group_title == "Movies"
    assert record.language == "French"
    assert record.logo == "https://logo.example/a.png"


def test_name_with_commas_is_kept_whole():
    content = '#EXTINF:-1 tvg-id="x",CNN, Special: Breaking News\nhttps://streams.example/cnn.m3u8\n'

    records = parse_playlist(content)

    assert [r.name for r in records] == ["CNN, Special: Breaking News"]


def test_comma_inside_attribute_value_does_not_split_title():
    content = '#EXTINF:-1 group-title="News,Politics",World Report\nhttps://streams.example/wr.m3u8\n'

    record = parse_playlist(content)[0]

    assert record.name == "World Report"
    assert record.category == "News,Politics"


def test_entry_without_url_before_next_extinf_is_dropped():
    content = (
        "#EXTINF:-1 tvg-logo=\"https://logo.example/lost.png\",Lost Channel\n"
        "#EXTINF:-1,Kept Channel\n"
        "https://streams.example/kept.m3u8\n"
    )

    records = parse_playlist(content)

    assert len(records) == 1
    assert records[0].name == "Kept Channel"
    # nothing from the overwritten entry leaks into the next one
    assert records[0].logo is None


def test_entry_without_url_at_end_of_input_is_dropped():
    content = "#EXTINF:-1,First\nhttps://streams.example/1.m3u8\n#EXTINF:-1,Dangling\n"

    assert [r.name for r in parse_playlist(content)] == ["First"]


def test_url_without_metadata_is_dropped():
    content = "https://streams.example/orphan.m3u8\n#EXTINF:-1,Named\nhttps://streams.example/named.m3u8\n"

    assert [r.stream_url for r in parse_playlist(content)] == ["https://streams.example/named.m3u8"]


def test_ignores_comments_blank_lines_and_other_directives():
    content = (
        "#EXTM3U x-tvg-url=\"https://epg.example/guide.xml\"\n"
        "\n"
        "# a comment\n"
        "#EXTINF:-1,Channel\n"
        "#EXTVLCOPT:http-user-agent=Mozilla\n"
        "   \n"
        "  https://streams.example/channel.m3u8  \n"
        "rtmp://streams.example/not-http\n"
    )

    records = parse_playlist(content)

    assert len(records) == 1
    assert records[0].stream_url == "https://streams.example/channel.m3u8"


def test_empty_title_falls_back_to_tvg_name():
    content = '#EXTINF:-1 tvg-name="Backup Name",\nhttps://streams.example/b.m3u8\n'

    assert parse_playlist(content)[0].name == "Backup Name"


def test_entry_without_any_name_is_dropped():
    content = '#EXTINF:-1 tvg-id="nameless"\nhttps://streams.example/n.m3u8\n'

    assert parse_playlist(content) == []


def test_malformed_input_never_raises():
    content = '#EXTINF:\n#EXTINF:-1 tvg-id="unterminated,Broken\nhttp\n\x00garbage\n#EXTINF:,\nhttps://\n'

    assert parse_playlist(content) == []


def test_handles_windows_line_endings_and_uppercase_scheme():
    content = "#EXTM3U\r\n#EXTINF:-1,Upper\r\nHTTPS://streams.example/upper.m3u8\r\n"

    records = parse_playlist(content)

    assert [r.name for r in records] == ["Upper"]


def test_iter_playlist_is_lazy():
    records = iter_playlist("#EXTINF:-1,A\nhttp://s.example/a\n#EXTINF:-1,B\nhttp://s.example/b\n")

    assert next(records).name == "A"
    assert next(records).name == "B"


def test_every_pair_yields_exactly_one_record(sample_playlist):
    records = parse_playlist(sample_playlist)

    assert [r.name for r in records] == [
        "CNN International",
        "1TV",
        "ESPN HD",
        "Local Channel 5",
        "Das Erste",
    ]


def test_unbalanced_quotes_take_title_after_first_comma():
    content = '#EXTINF:-1 tvg-id="x" tvg-name="Kanal "5",Kanal 5\nhttps://s.example/5\n'

    assert [r.name for r in parse_playlist(content)] == ["Kanal 5"]
