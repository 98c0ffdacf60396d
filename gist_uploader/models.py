from __future__ import annotations

from typing import Optional, Dict, Any
from pydantic import BaseModel, field_validator

# Name under which standard input is uploaded.
STDIN_NAME = "<stdin>"


class FileContent(BaseModel):
    content: str


class UploadRequest(BaseModel):
    description: Optional[str] = None
    public: bool = False
    files: Dict[str, FileContent]

    @field_validator("description")
    @classmethod
    def _blank_description_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("files")
    @classmethod
    def _at_least_one_file(cls, v: Dict[str, FileContent]) -> Dict[str, FileContent]:
        if not v:
            raise ValueError("a gist needs at least one file")
        return v

    @classmethod
    def from_contents(cls, contents: Dict[str, str], description: str = "", public: bool = False) -> "UploadRequest":
        return cls(
            description=description,
            public=public,
            files={name: FileContent(content=text) for name, text in contents.items()},
        )

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the gist API; the description key is dropped when empty."""
        return self.model_dump(exclude_none=True)


class UploadResult(BaseModel):
    html_url: str
