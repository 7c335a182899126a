"""Helpers for slicing an EOS running-configuration into blocks."""

from __future__ import annotations

import re

# Top-level ``interface <name>`` lines; group 1 is the interface name.
_INTERFACE_LINE_RE: re.Pattern[str] = re.compile(r"^interface\s(\S.*?)\s*$", re.MULTILINE)


def find_block(config: str, anchor: str) -> str | None:
    """Return the configuration block introduced by *anchor*.

    The block starts at the first line equal to *anchor* and extends over
    every following indented (or blank) line, stopping at the next line that
    begins in column 0 (including ``!`` separators).

    Args:
        config: Full running configuration text.
        anchor: Literal header line, e.g. ``"interface Ethernet1"``.  The
            line must match exactly, so ``Ethernet1`` never matches
            ``Ethernet10``.

    Returns:
        The block text (header line included, newline terminated), or
        ``None`` if no line matches *anchor*.
    """
    lines = config.splitlines()
    for idx, line in enumerate(lines):
        if line.rstrip() != anchor:
            continue
        block = [line]
        for child in lines[idx + 1:]:
            if child and not child[0].isspace():
                break
            block.append(child)
        return "\n".join(block) + "\n"
    return None


def parse_interface_names(config: str) -> list[str]:
    """Return every interface name declared at the top level of *config*.

    Names are returned in configuration order.
    """
    return _INTERFACE_LINE_RE.findall(config)
