"""
XHTML well-formedness checking.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List

from lxml import etree


def _new_parser() -> etree.XMLParser:
    # recover keeps parsing after an error; entities and DTDs are never fetched
    return etree.XMLParser(
        encoding="utf-8",
        recover=True,
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
    )


def single_line(message: str) -> str:
    return message.replace("\r\n", "\n").replace("\n", ", ")


def well_formedness_errors(text: str) -> List[str]:
    """
    Run markup through a strict XML parser and return one message per error.

    The parser makes a single forward pass and keeps going past each
    error, so a page can produce several messages. Every message is a
    single line.
    """
    parser = _new_parser()
    failure = None
    try:
        etree.fromstring(text.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        failure = e

    messages = list(_format_log(parser.error_log.filter_from_errors()))
    if failure is not None and not messages:
        messages.append(single_line(str(failure)))
    return messages


def _format_log(entries: Iterable) -> Iterator[str]:
    for entry in entries:
        yield single_line(f"{entry.message.strip()}\nLine: {entry.line}\nColumn: {entry.column}")
