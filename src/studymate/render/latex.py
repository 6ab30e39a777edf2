"""LaTeX cleanup for terminal output.

Model answers to maths questions often contain LaTeX that a terminal cannot
typeset. The patterns here reduce it to readable plain text.
"""

import re

_DELIMITERS = [
    (re.compile(r"\\\(\s*"), ""),
    (re.compile(r"\s*\\\)"), ""),
    (re.compile(r"\\\[\s*"), ""),
    (re.compile(r"\s*\\\]"), ""),
    # $$ before single $
    (re.compile(r"\$\$\s*"), ""),
    (re.compile(r"(?<!\\)\$([^$]+)(?<!\\)\$"), r"\1"),
]

_STRUCTURES = [
    (re.compile(r"\\frac\{([^}]*)\}\{([^}]*)\}"), r"(\1)/(\2)"),
    (re.compile(r"\\sqrt\{([^}]*)\}"), r"√(\1)"),
    (re.compile(r"\\(?:text|textbf|textit|mathrm|mathbf|operatorname)\{([^}]*)\}"), r"\1"),
]

_SYMBOLS = {
    "cdots": "…",
    "ldots": "…",
    "times": "×",
    "cdot": "·",
    "div": "÷",
    "pm": "±",
    "leq": "≤",
    "geq": "≥",
    "neq": "≠",
    "approx": "≈",
    "infty": "∞",
    "pi": "π",
    "alpha": "α",
    "beta": "β",
    "theta": "θ",
    "Delta": "Δ",
    "sum": "∑",
    "int": "∫",
    "rightarrow": "→",
    "qquad": "  ",
    "quad": " ",
}
_SYMBOL_PATTERN = re.compile(r"\\(" + "|".join(sorted(_SYMBOLS, key=len, reverse=True)) + r")(?![a-zA-Z])")

_LEFTOVER_COMMAND = re.compile(r"\\[a-zA-Z]+\{([^}]*)\}")
_GROUPED_SCRIPT = re.compile(r"([\^_])\{([^}]*)\}")


def clean_latex(text: str) -> str:
    """Replace common LaTeX notation with plain-text equivalents."""
    for pattern, replacement in _DELIMITERS:
        text = pattern.sub(replacement, text)
    for pattern, replacement in _STRUCTURES:
        text = pattern.sub(replacement, text)
    text = _SYMBOL_PATTERN.sub(lambda m: _SYMBOLS[m.group(1)], text)
    text = _LEFTOVER_COMMAND.sub(r"\1", text)
    return _GROUPED_SCRIPT.sub(r"\1(\2)", text)
