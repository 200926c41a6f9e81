from pathlib import Path

from app.core.dto.contact_form import SubmissionModel
from app.core.repositories.base import JsonArrayRepository


class SubmissionRepository(JsonArrayRepository[SubmissionModel]):

    def __init__(self, path: Path | str):
        super().__init__(path, SubmissionModel)
