import pytest

from asset_gallery import filter_assets, paginate, parse_tags


ASSETS = [
    {"id": "1", "name": "Hero Banner.png", "type": "image", "tags": ["summer", "hero"]},
    {"id": "2", "name": "Launch Teaser.mp4", "type": "video", "tags": ["launch"]},
    {"id": "3", "name": "jingle.mp3", "type": "audio", "tags": ["Summer"]},
    {"id": "4", "name": "Logo.svg", "type": "image", "tags": []},
]


def test_all_type_keeps_everything():
    assert [a["id"] for a in filter_assets(ASSETS, "all")] == ["1", "2", "3", "4"]


def test_filter_by_type():
    assert [a["id"] for a in filter_assets(ASSETS, "image")] == ["1", "4"]


def test_search_matches_name_and_tags_case_insensitively():
    assert [a["id"] for a in filter_assets(ASSETS, "all", "SUMMER")] == ["1", "3"]
    assert [a["id"] for a in filter_assets(ASSETS, "all", "teaser")] == ["2"]


def test_type_and_search_combine():
    assert [a["id"] for a in filter_assets(ASSETS, "image", "summer")] == ["1"]


def test_filter_does_not_mutate_input():
    filter_assets(ASSETS, "video")
    assert len(ASSETS) == 4


def test_paginate_first_and_last_page():
    items = [{"id": str(i)} for i in range(25)]

    first = paginate(items, 1, 12)
    assert [i["id"] for i in first["items"]] == [str(i) for i in range(12)]
    assert first["total"] == 25
    assert first["page_count"] == 3

    last = paginate(items, 3, 12)
    assert [i["id"] for i in last["items"]] == ["24"]


def test_paginate_past_end_is_empty():
    result = paginate([{"id": "1"}], 5, 12)
    assert result["items"] == []
    assert result["page_count"] == 1


def test_paginate_empty_list():
    result = paginate([], 1, 12)
    assert result["items"] == []
    assert result["page_count"] == 0


def test_paginate_rejects_zero_page_size():
    with pytest.raises(ValueError):
        paginate([], 1, 0)


def test_parse_tags():
    assert parse_tags(" summer, hero ,, launch ") == ["summer", "hero", "launch"]
    assert parse_tags("") == []
    assert parse_tags(None) == []
