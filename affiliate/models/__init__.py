"""Models - re-exports all models and Base.metadata."""

from .base import Base, TimestampMixin, ProjectMixin
from .workspace import Workspace
from .partner import Partner
from .program import (
    Program,
    ProgramEnrollment,
    ProgramEnrollmentStatus,
    ProgramResource,
    ProgramResourceType,
)
from .link import Link
from .customer import Customer
from .commission import Commission

__all__ = [
    "Base",
    "TimestampMixin",
    "ProjectMixin",
    "Workspace",
    "Partner",
    "Program",
    "ProgramEnrollment",
    "ProgramEnrollmentStatus",
    "ProgramResource",
    "ProgramResourceType",
    "Link",
    "Customer",
    "Commission",
]
