import asyncio
import json
import os
import time
from pathlib import Path
from typing import Generic, TypeVar

import aiofiles
import aiofiles.os
from pydantic import BaseModel, ValidationError

from app.infrastructure.errors.contact_errors import SubmissionStoreError
from app.infrastructure.logging import get_logger


logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


class JsonArrayRepository(Generic[ModelType]):
    """
    Хранилище записей в одном JSON-документе (массив объектов).

    Запись идёт через единственного писателя: чтение-изменение-запись
    выполняется под asyncio.Lock, новый документ пишется во временный
    файл и атомарно подменяет старый. Отсутствующий файл читается как
    пустой массив.

    Экземпляр должен быть один на процесс, иначе блокировка не работает.
    """

    def __init__(self, path: Path | str, model: type[ModelType]):
        self.path = Path(path)
        self.model = model
        self._lock = asyncio.Lock()

    async def _read_documents(self) -> list:
        if not await aiofiles.os.path.exists(self.path):
            return []

        async with aiofiles.open(self.path, mode="r", encoding="utf-8") as file:
            content = await file.read()

        documents = json.loads(content)
        if not isinstance(documents, list):
            raise ValueError(f"expected a JSON array, got {type(documents).__name__}")
        return documents

    async def _write_documents(self, documents: list) -> None:
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")

        async with aiofiles.open(tmp_path, mode="w", encoding="utf-8") as file:
            await file.write(json.dumps(documents, ensure_ascii=False, indent=2))
            await file.flush()
            await asyncio.to_thread(os.fsync, file.fileno())

        await aiofiles.os.replace(tmp_path, self.path)

    async def _quarantine_document(self) -> Path:
        target = self.path.with_name(f"{self.path.name}.corrupt-{int(time.time() * 1000)}")
        await aiofiles.os.replace(self.path, target)
        return target

    async def get_all_items(self) -> list[ModelType]:
        try:
            documents = await self._read_documents()
        except (OSError, ValueError) as exc:
            logger.error("document_read_failed", path=str(self.path), error=str(exc))
            return []

        items = []
        for document in documents:
            try:
                items.append(self.model.model_validate(document))
            except ValidationError as exc:
                logger.warning("document_item_skipped", path=str(self.path), error=str(exc))
        return items

    async def add_item(self, item: ModelType) -> ModelType:
        async with self._lock:
            try:
                documents = await self._read_documents()
            except ValueError as exc:
                # повреждённый документ откладываем в сторону, историю не теряем
                try:
                    moved_to = await self._quarantine_document()
                except OSError as move_exc:
                    raise SubmissionStoreError(str(move_exc)) from move_exc
                logger.error(
                    "document_corrupted",
                    path=str(self.path),
                    moved_to=str(moved_to),
                    error=str(exc),
                )
                documents = []
            except OSError as exc:
                raise SubmissionStoreError(str(exc)) from exc

            documents.append(item.model_dump(by_alias=True))

            try:
                await self._write_documents(documents)
            except OSError as exc:
                raise SubmissionStoreError(str(exc)) from exc

        return item
