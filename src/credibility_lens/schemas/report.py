"""Report descriptors: the declared shape of a model reply plus its prompt.

Descriptors live as YAML files in credibility_lens/reports/ so that report
variants are configuration, not separate code paths.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from .results import ContentKind

REPORTS_DIR = Path(__file__).resolve().parent.parent / "reports"

FieldType = Literal["string", "number", "boolean", "string_array", "object"]


class FieldSpec(BaseModel):
    type: FieldType
    required: bool = True
    allowed: Optional[List[str]] = None
    description: str = ""
    fields: Dict[str, FieldSpec] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_constraints(self) -> "FieldSpec":
        if self.allowed is not None:
            if self.type != "string":
                raise ValueError(f"allowed values only apply to string fields, not {self.type}")
            if not self.allowed:
                raise ValueError("allowed must list at least one value")
        if self.type == "object" and not self.fields:
            raise ValueError("object fields must declare nested fields")
        if self.type != "object" and self.fields:
            raise ValueError(f"nested fields only apply to object fields, not {self.type}")
        return self


class ReportSchema(BaseModel):
    """
    A named report shape for one content kind.
    `prompt` is a template; `{language}` is substituted at build time.
    """
    name: str
    kind: ContentKind
    title: str
    prompt: str
    fields: Dict[str, FieldSpec] = Field(..., min_length=1)


@lru_cache()
def load_report(name: str) -> ReportSchema:
    path = REPORTS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Report {name} not found in {REPORTS_DIR}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    data.setdefault("name", name)
    return ReportSchema.model_validate(data)
