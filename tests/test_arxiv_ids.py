import pytest

from arxiv_ids import extract_arxiv_id_from_url


@pytest.mark.parametrize("text", [
    "",
    "quantum gravity",
    "2005.11401",
    "arxiv.org/abs/2005.11401",
    "https://arxiv.org/list/cs.CL/recent",
    "https://arxiv.org/abs/hep-th/9901001",
    "https://example.org/abs/2005.11401",
    "https://arxiv.org/abs/2005.11401?context=cs",
    "https://arxiv.org/abs/2005.11401v4 and more text",
    "see https://arxiv.org/abs/2005.11401",
    "ftp://arxiv.org/abs/2005.11401",
])
def test_non_arxiv_urls_return_none(text: str) -> None:
    assert extract_arxiv_id_from_url(text, keep_version=True) is None
    assert extract_arxiv_id_from_url(text, keep_version=False) is None


@pytest.mark.parametrize("url", [
    "https://arxiv.org/abs/2005.11401v4",
    "http://arxiv.org/abs/2005.11401v4",
    "https://www.arxiv.org/abs/2005.11401v4",
    "https://export.arxiv.org/abs/2005.11401v4",
    "https://arxiv.org/pdf/2005.11401v4",
    "https://arxiv.org/pdf/2005.11401v4.pdf",
])
def test_version_kept_or_stripped(url: str) -> None:
    assert extract_arxiv_id_from_url(url, keep_version=True) == "2005.11401v4"
    assert extract_arxiv_id_from_url(url, keep_version=False) == "2005.11401"


@pytest.mark.parametrize("url", [
    "https://arxiv.org/abs/1812.01097",
    "https://arxiv.org/pdf/1812.01097",
    "https://arxiv.org/pdf/1812.01097.pdf",
])
def test_unversioned_ids(url: str) -> None:
    assert extract_arxiv_id_from_url(url, keep_version=True) == "1812.01097"
    assert extract_arxiv_id_from_url(url, keep_version=False) == "1812.01097"


def test_extracted_id_is_stable_across_url_forms() -> None:
    arxiv_id = extract_arxiv_id_from_url("https://arxiv.org/pdf/2005.11401v4.pdf", keep_version=True)
    assert extract_arxiv_id_from_url(f"https://arxiv.org/abs/{arxiv_id}", keep_version=True) == arxiv_id


@pytest.mark.parametrize("text", [
    " https://arxiv.org/abs/2005.11401 ",
    "https://arxiv.org/abs/2005.11401v4\n",
    "\thttps://arxiv.org/pdf/2005.11401.pdf",
])
def test_surrounding_whitespace_is_not_an_exact_url(text: str) -> None:
    assert extract_arxiv_id_from_url(text, keep_version=True) is None


def test_non_string_input_returns_none() -> None:
    assert extract_arxiv_id_from_url(None, keep_version=True) is None  # type: ignore[arg-type]
