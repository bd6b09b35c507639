from __future__ import annotations
from typing import List, Optional, Tuple

COMMENT_CHAR = ";"
LABEL_TERMINATOR = ":"

def strip_comment(line: str) -> str:
    """Remove a ';' comment and surrounding whitespace."""
    return line.split(COMMENT_CHAR, 1)[0].strip()

def tokenize(line: str) -> List[str]:
    return line.split()

def split_label(tokens: List[str]) -> Tuple[Optional[str], List[str]]:
    """Return (label, rest) if the first token is 'label:', else (None, tokens)."""
    if not tokens or not tokens[0].endswith(LABEL_TERMINATOR):
        return None, tokens
    return tokens[0][:-len(LABEL_TERMINATOR)], tokens[1:]

def split_mnemonic_args(tokens: List[str]) -> Tuple[str, List[str]]:
    if not tokens:
        return "", []
    return tokens[0], tokens[1:]
