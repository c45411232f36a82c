# painmap/infrastructure/store/pain_area_store.py
"""
In-memory pain area store for one form session.

Every mutation notifies the registered observers synchronously, which is how
the form-state container keeps its ``painAreas`` list in step with the
marks on screen.
"""
from typing import Iterable, Iterator, List, Optional, Union

from painmap.domain.common.errors import OutOfRangeError, ValidationError
from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import View
from painmap.domain.models.pain_area import (
    MAX_INTENSITY, MIN_INTENSITY, PainAreaRecord
)
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_pain_area_store_service import IPainAreaStore, PainAreaObserver


def _check_intensity(value) -> Optional[ValidationError]:
    if not isinstance(value, int) or isinstance(value, bool):
        return ValidationError(
            message=f"Intensity must be an integer, got {value!r}",
            details={"value": value}
        )
    if not MIN_INTENSITY <= value <= MAX_INTENSITY:
        return OutOfRangeError("Intensity", value, MIN_INTENSITY, MAX_INTENSITY)
    return None


class InMemoryPainAreaStore(IPainAreaStore):
    """
    Ordered list of PainAreaRecord objects.

    Records are frozen; edits replace the record at its position.

    Records are never deduplicated by region or position; several marks in
    the same region at different intensities are expected. Ids are unique.
    """

    def __init__(self, logger: ILoggerService):
        self.logger = logger
        self._records: List[PainAreaRecord] = []
        self._observers: List[PainAreaObserver] = []

    def add(self, record: PainAreaRecord) -> Result[PainAreaRecord]:
        if self._index_of(record.id) is not None:
            return Result.fail(ValidationError(
                message=f"Pain area id already exists: {record.id}",
                details={"id": record.id}
            ))

        error = _check_intensity(record.intensity)
        if error is not None:
            self.logger.error(str(error), id=record.id)
            return Result.fail(error)

        self._records.append(record)
        self.logger.info("Pain area added", id=record.id, region=record.region,
                         view=record.origin_view.value)
        self._notify_observers()
        return Result.ok(record)

    def set_intensity(self, record_id: str, value: int) -> Result[PainAreaRecord]:
        error = _check_intensity(value)
        if error is not None:
            self.logger.error(str(error), id=record_id)
            return Result.fail(error)

        index = self._index_of(record_id)
        if index is None:
            return Result.fail(_not_found(record_id))

        record = self._records[index].with_intensity(value)
        self._records[index] = record
        self.logger.debug("Pain area intensity changed", id=record_id, intensity=value)
        self._notify_observers()
        return Result.ok(record)

    def set_free_text(self, record_id: str, text: Optional[str]) -> Result[PainAreaRecord]:
        index = self._index_of(record_id)
        if index is None:
            return Result.fail(_not_found(record_id))

        record = self._records[index].with_free_text(text.strip() if text and text.strip() else None)
        self._records[index] = record
        self._notify_observers()
        return Result.ok(record)

    def remove(self, record_id: str) -> bool:
        index = self._index_of(record_id)
        if index is None:
            # Repeated removal from a double click
            self.logger.debug("Pain area already removed", id=record_id)
            return False

        removed = self._records.pop(index)
        self.logger.info("Pain area removed", id=removed.id, region=removed.region)
        self._notify_observers()
        return True

    def filter_by_view(self, view: Union[View, str]) -> List[PainAreaRecord]:
        view = View.parse(view)
        return [record for record in self._records if record.origin_view is view]

    def get(self, record_id: str) -> Optional[PainAreaRecord]:
        index = self._index_of(record_id)
        return self._records[index] if index is not None else None

    def list_all(self) -> List[PainAreaRecord]:
        return list(self._records)

    def replace_all(self, records: Iterable[PainAreaRecord]) -> Result[bool]:
        """Swap the whole contents, e.g. when returning to the pain-mapping step."""
        records = list(records)
        seen = set()
        for record in records:
            if record.id in seen:
                return Result.fail(ValidationError(
                    message=f"Duplicate pain area id: {record.id}",
                    details={"id": record.id}
                ))
            seen.add(record.id)
            error = _check_intensity(record.intensity)
            if error is not None:
                return Result.fail(error)

        self._records = records
        self._notify_observers()
        return Result.ok(True)

    def clear(self) -> None:
        self._records = []
        self._notify_observers()

    def register_observer(self, callback: PainAreaObserver) -> None:
        """
        Register a callback receiving the full record list after each change.

        Args:
            callback: Function called with the current list of records
        """
        if callback not in self._observers:
            self._observers.append(callback)
            self.logger.debug(f"Observer registered: {_callback_name(callback)}")

    def unregister_observer(self, callback: PainAreaObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PainAreaRecord]:
        return iter(list(self._records))

    def _index_of(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _notify_observers(self) -> None:
        """Call all registered observers with a snapshot of the records."""
        snapshot = self.list_all()
        for callback in list(self._observers):
            try:
                callback(snapshot)
            except Exception as e:
                self.logger.error(f"Error notifying observer {_callback_name(callback)}: {e}")


def _not_found(record_id: str) -> ValidationError:
    return ValidationError(
        message=f"Pain area not found: {record_id}",
        details={"id": record_id}
    )


def _callback_name(callback) -> str:
    return getattr(callback, "__qualname__", repr(callback))
