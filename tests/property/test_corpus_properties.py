from __future__ import annotations

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from errordocs.adapters.markdown_parser import MarkdownDocumentParser
from errordocs.app.corpus import CorpusLoader, DocumentRenderer

_codes = st.lists(st.integers(min_value=0, max_value=9999), min_size=1, max_size=8, unique=True).map(
    lambda numbers: [f"E{number:04d}" for number in numbers]
)
_description = st.text(
    alphabet=st.characters(min_codepoint=97, max_codepoint=122) | st.just(" "),
    min_size=1,
    max_size=30,
).filter(lambda text: text.strip())


@settings(max_examples=30, deadline=None)
@given(codes=_codes, data=st.data())
def test_corpus_order_is_independent_of_write_order(codes: list[str], data: st.DataObject) -> None:
    order = data.draw(st.permutations(codes))
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        for code in order:
            (root / f"{code}.md").write_text(f"# {code}: sample\n\n    x;\n", encoding="utf-8")

        documents = CorpusLoader().load(root)

    assert [doc.file_path_error_code for doc in documents] == sorted(codes)


@settings(max_examples=50)
@given(number=st.integers(min_value=0, max_value=9999), description=_description)
def test_title_round_trip(number: int, description: str) -> None:
    code = f"E{number:04d}"
    doc = MarkdownDocumentParser().parse_document(Path(f"{code}.md"), f"# {code}: {description}\n")

    assert doc.title_error_code == code
    assert doc.title_error_description == description.strip()


@settings(max_examples=30)
@given(samples=st.lists(st.text(alphabet="abc<>&;() \n", min_size=1, max_size=20).filter(str.strip), max_size=4))
def test_rendering_is_deterministic(samples: list[str]) -> None:
    body = "".join(f"```\n{sample}\n```\n\n" for sample in samples)
    text = f"# E0100: deterministic\n\n{body}"
    first = DocumentRenderer().render(MarkdownDocumentParser().parse_document(Path("E0100.md"), text))
    second = DocumentRenderer().render(MarkdownDocumentParser().parse_document(Path("E0100.md"), text))

    assert first == second
    assert first.count("<figure>") == text.count("```\n") // 2
