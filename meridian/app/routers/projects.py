"""Project routes."""
from typing import Any, Dict

from ..domain.models import Project
from ..domain.schemas import ProjectListItem
from .records import base_projection, build_router


def project_projection(record: Project) -> Dict[str, Any]:
    data = record.data if isinstance(record.data, dict) else {}
    return {
        **base_projection(record),
        "categories": data.get("category"),
        "location": data.get("location"),
    }


router = build_router(Project, ProjectListItem, project_projection)
