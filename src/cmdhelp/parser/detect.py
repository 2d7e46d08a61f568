"""Auto-detect the kind of command help input."""

from pathlib import Path

import yaml

from .blocks import FRONT_MATTER_RE, HEADING_RE

LEGACY_KEYS = {
    "Type",
    "Parameter Sets",
    "Aliases",
    "Required",
    "Position",
    "Default value",
    "Accept pipeline input",
    "Accept wildcard characters",
}


def detect_format(file_path: Path) -> str:
    """Detect the kind of a command help file.

    Returns: 'legacy', 'module', or 'syntax'.
    """
    text = file_path.read_text(encoding="utf-8-sig")

    if FRONT_MATTER_RE.match(text):
        return "module"

    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = "\n".join(line for line in stripped.splitlines() if not line.startswith("```"))

    try:
        data = yaml.safe_load(stripped)
        if isinstance(data, dict) and LEGACY_KEYS & set(map(str, data)):
            return "legacy"
    except yaml.YAMLError:
        pass

    if any(HEADING_RE.match(line) for line in text.splitlines()):
        return "module"

    return "syntax"
