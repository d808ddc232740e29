"""Write the generated schema document as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def render_schema(document: dict[str, Any]) -> str:
    # Key order is part of the output; never sort
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_schema(document: dict[str, Any], output_path: Path) -> Path:
    """Serialize the document and write it to output_path."""
    text = render_schema(document)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path
