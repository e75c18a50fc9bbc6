"""
Set up an mdBook project for WaveDrom.

`install` registers the preprocessor in `book.toml`, adds the WaveDrom
scripts to `output.html.additional-js` and copies the bundled scripts next
to `book.toml`. `book.toml` is edited with tomlkit so comments and layout
the user wrote are kept.
"""
from __future__ import annotations

import logging
import os
import shutil
from typing import Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import Array, Table
from tomlkit.toml_document import TOMLDocument

from ._logging import resolve_logger
from .errors import InstallError
from .preprocess import PREPROCESSOR_NAME

CONFIG_FILE = "book.toml"
COMMAND = "mdbook-wavedrom"
ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")
WAVEDROM_FILES = ("wavedrom.min.js", "wavedrome-default.js")

EXAMPLE_BLOCK = """```wavedrom
{signal: [
  {name: 'clk', wave: 'p.....|...'},
  {name: 'dat', wave: 'x.345x|=.x', data: ['head', 'body', 'tail', 'data']},
  {name: 'req', wave: '0.1..0|1.0'},
  {},
  {name: 'ack', wave: '1.....|01.'}
]}
```"""


def load_config(path: str) -> TOMLDocument:
    if not os.path.exists(path):
        raise InstallError(f"Configuration file '{path}' missing")
    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read()
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise InstallError(f"Configuration file '{path}' is not valid TOML: {exc}") from exc


def has_preprocessor(doc: TOMLDocument) -> bool:
    preprocessor = doc.get("preprocessor")
    if not isinstance(preprocessor, dict):
        return False
    return isinstance(preprocessor.get(PREPROCESSOR_NAME), dict)


def _table(parent, key: str, *, super_table: bool = False) -> Table:
    item = parent.get(key)
    if not isinstance(item, dict):
        # A super table only holds sub-tables and gets no header of its own.
        item = tomlkit.table(is_super_table=super_table or None)
        parent[key] = item
    return parent[key]


def add_preprocessor(doc: TOMLDocument) -> None:
    preprocessor = _table(doc, "preprocessor", super_table=True)
    entry = _table(preprocessor, PREPROCESSOR_NAME)
    entry["command"] = COMMAND


def additional_js(doc: TOMLDocument) -> Optional[Array]:
    """Return `output.html.additional-js` if the book already has one."""
    output = doc.get("output")
    if not isinstance(output, dict):
        return None
    html = output.get("html")
    if not isinstance(html, dict):
        return None
    files = html.get("additional-js")
    return files if isinstance(files, list) else None


def has_file(files: Optional[Array], name: str) -> bool:
    if not files:
        return False
    return any(isinstance(entry, str) and entry.endswith(name) for entry in files)


def insert_additional_js(doc: TOMLDocument, name: str) -> None:
    html = _table(_table(doc, "output", super_table=True), "html")
    files = html.get("additional-js")
    if not isinstance(files, list):
        html["additional-js"] = tomlkit.array()
        files = html["additional-js"]
    files.append(name)


def add_additional_files(doc: TOMLDocument, names, log) -> bool:
    changed = False
    for name in names:
        if has_file(additional_js(doc), name):
            log.debug("'%s' already in 'additional-js'. Skipping", name)
            continue
        if not changed:
            log.info("Adding additional files to configuration")
        log.debug("Adding '%s' to 'additional-js'", name)
        insert_additional_js(doc, name)
        changed = True
    return changed


def copy_assets(book_dir: str, log, assets_dir: str | None = None) -> list[str]:
    """Copy bundled scripts into `book_dir`, never overwriting. Returns the names written."""
    assets_dir = assets_dir or ASSETS_DIR
    written: list[str] = []
    for name in WAVEDROM_FILES:
        target = os.path.join(book_dir, name)
        if os.path.exists(target):
            log.debug("'%s' already exists (Path: %s). Skipping.", name, target)
            continue
        source = os.path.join(assets_dir, name)
        if not os.path.isfile(source):
            log.warning("'%s' is not bundled with this installation; copy it to %s by hand", name, target)
            continue
        if not written:
            log.info("Writing additional files to project directory at %s", book_dir)
        log.debug("Writing content for '%s' into %s", name, target)
        shutil.copyfile(source, target)
        written.append(name)
    return written


def install(
    book_dir: str = ".",
    *,
    assets_dir: str | None = None,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> bool:
    """
    Prepare the book rooted at `book_dir` for WaveDrom diagrams.

    Only scripts present in `book_dir` are listed in `additional-js`; mdBook
    refuses to build when one of those entries points at a missing file.
    Run `install` again after adding a missing script by hand.

    Returns True when `book.toml` was rewritten.

    Raises:
        InstallError: if `book.toml` is missing or not valid TOML.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__)
    config = os.path.join(book_dir, CONFIG_FILE)

    log.info("Reading configuration file %s", config)
    doc = load_config(config)

    copy_assets(book_dir, log, assets_dir)
    present = []
    for name in WAVEDROM_FILES:
        if os.path.isfile(os.path.join(book_dir, name)):
            present.append(name)
        else:
            log.warning("Not adding '%s' to 'additional-js': file missing from %s", name, book_dir)

    has_pre = has_preprocessor(doc)
    if not has_pre:
        log.info("Adding preprocessor configuration")
        add_preprocessor(doc)

    added_files = add_additional_files(doc, present, log)

    changed = not has_pre or added_files
    if changed:
        log.info("Saving changed configuration to %s", config)
        with open(config, "w", encoding="utf-8") as fh:
            fh.write(tomlkit.dumps(doc))

    log.info("Files & configuration for mdbook-wavedrom are installed. You can start using it in your book.")
    log.info("Add a code block like:\n%s", EXAMPLE_BLOCK)
    return changed
