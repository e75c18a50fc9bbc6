# conftest.py - pytest configuration
import pytest


def make_chapter(name, content, sub_items=None):
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": None,
            "sub_items": sub_items or [],
            "path": f"{name.lower()}.md",
            "source_path": f"{name.lower()}.md",
            "parent_names": [],
        }
    }


@pytest.fixture
def wavedrom_chapter_md():
    return "# Timing\n\n```wavedrom\n{signal: [{name: 'clk', wave: 'p.....|...'}]}\n```\n\nText\n"


@pytest.fixture
def book_dir(tmp_path):
    (tmp_path / "book.toml").write_text(
        '[book]\ntitle = "Example"  # keep me\n', encoding="utf-8"
    )
    return tmp_path
