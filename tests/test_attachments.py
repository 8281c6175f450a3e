# tests/test_attachments.py
from __future__ import annotations

import pytest

from iustime.services.attachments import attachment_from_file, decode_data_url, human_size


def test_file_becomes_data_url(tmp_path):
    f = tmp_path / "acta.txt"
    f.write_bytes(b"hola mundo")
    att = attachment_from_file(f)
    assert att.name == "acta.txt"
    assert att.mime_type == "text/plain"
    assert att.size == 10
    assert att.data.startswith("data:text/plain;base64,")
    assert decode_data_url(att.data) == ("text/plain", b"hola mundo")
    assert att.to_dict()["type"] == "text/plain"


@pytest.mark.parametrize("data", ["", "hola", "data:text/plain,hola", "data:text/plain;base64,@@@"])
def test_bad_data_urls(data):
    with pytest.raises(ValueError):
        decode_data_url(data)


def test_human_size():
    assert human_size(512) == "512 B"
    assert human_size(2048) == "2.0 KB"
    assert human_size(3 * 1024 * 1024) == "3.0 MB"
