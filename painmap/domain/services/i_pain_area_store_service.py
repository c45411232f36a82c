# painmap/domain/services/i_pain_area_store_service.py
"""
Pain area store interface.

Holds the ordered pain marks of the current form session.
"""
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, List, Optional, Union

from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import View
from painmap.domain.models.pain_area import PainAreaRecord

PainAreaObserver = Callable[[List[PainAreaRecord]], None]


class IPainAreaStore(ABC):
    """Ordered collection of pain area records with observer notification."""

    @abstractmethod
    def add(self, record: PainAreaRecord) -> Result[PainAreaRecord]:
        """
        Append a record.

        Returns:
            Failure with ValidationError for a duplicate id, or with
            OutOfRangeError for an intensity outside 0..10
        """
        pass

    @abstractmethod
    def set_intensity(self, record_id: str, value: int) -> Result[PainAreaRecord]:
        """
        Replace a record's intensity in place.

        Returns:
            Failure with OutOfRangeError when value is outside 0..10, or with
            ValidationError for a non-integer value or unknown id
        """
        pass

    @abstractmethod
    def set_free_text(self, record_id: str, text: Optional[str]) -> Result[PainAreaRecord]:
        pass

    @abstractmethod
    def remove(self, record_id: str) -> bool:
        """Remove a record. Unknown ids are a no-op; returns whether anything was removed."""
        pass

    @abstractmethod
    def filter_by_view(self, view: Union[View, str]) -> List[PainAreaRecord]:
        pass

    @abstractmethod
    def get(self, record_id: str) -> Optional[PainAreaRecord]:
        pass

    @abstractmethod
    def list_all(self) -> List[PainAreaRecord]:
        pass

    @abstractmethod
    def replace_all(self, records: Iterable[PainAreaRecord]) -> Result[bool]:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def register_observer(self, callback: PainAreaObserver) -> None:
        pass

    @abstractmethod
    def unregister_observer(self, callback: PainAreaObserver) -> None:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[PainAreaRecord]:
        pass
