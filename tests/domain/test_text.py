from __future__ import annotations

import pytest

from photorecon.domain.text import clip, file_title, is_generated, photo_file_title, slug, title_case


def test_clip_trims_and_cuts() -> None:
    assert clip("  hello world  ", 5) == "hello"
    assert clip("abc", 10) == "abc"


def test_title_case_keeps_inner_capitals() -> None:
    assert title_case("new york McDonald") == "New York McDonald"


def test_slug_normalizes_accents_and_separators() -> None:
    assert slug("Crème Brûlée!") == "creme-brulee"
    assert slug("  Golden  Gate ") == "golden-gate"


@pytest.mark.parametrize(
    "name",
    [
        "IMG_1234.JPG",
        "DSC01234.jpg",
        "20190714_153000.jpg",
        "0123456789abcdef0123.heic",
        "3f2504e0-4f89-11d3-9a0c-0305e82c3301.jpg",
        "123456.png",
    ],
)
def test_is_generated_detects_machine_names(name: str) -> None:
    assert is_generated(name)


@pytest.mark.parametrize("name", ["Wedding.jpg", "beach-holiday.jpeg", "Grandma.png"])
def test_is_generated_keeps_human_names(name: str) -> None:
    assert not is_generated(name)


def test_file_title_drops_noise_words_and_extensions() -> None:
    assert file_title("beach_holiday_edited.jpg") == "Beach Holiday"
    assert file_title("Wedding.jpg") == "Wedding"
    assert file_title("IMG.jpg") == ""


def test_photo_file_title_falls_back_to_original_folder() -> None:
    assert photo_file_title("IMG_0001.jpg", "Summer in Rome/IMG_0001.jpg", "") == "Summer Rome"
    assert photo_file_title("Wedding.jpg", "", "") == "Wedding"
    assert photo_file_title("IMG_0001.jpg", "", "") == ""
