"""Program resource schemas."""

from __future__ import annotations

from pydantic import BaseModel


class ProgramLogo(BaseModel):
    id: str
    name: str | None = None
    url: str
    size: int | None = None

    model_config = {"from_attributes": True}


class ProgramColor(BaseModel):
    id: str
    name: str | None = None
    color: str

    model_config = {"from_attributes": True}


class ProgramFile(BaseModel):
    id: str
    name: str | None = None
    url: str
    size: int | None = None

    model_config = {"from_attributes": True}


class ProgramResources(BaseModel):
    logos: list[ProgramLogo] = []
    colors: list[ProgramColor] = []
    files: list[ProgramFile] = []
