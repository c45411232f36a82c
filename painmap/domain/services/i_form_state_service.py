# painmap/domain/services/i_form_state_service.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import View
from painmap.domain.models.pain_area import PainAreaRecord
from painmap.domain.services.i_pain_area_store_service import IPainAreaStore


class IAssessmentFormState(ABC):
    """
    Authoritative state of the assessment form for the pain-mapping step.

    Owns the ``painAreas`` list persisted with the assessment and the paths
    of the captured pain map images.
    """

    @property
    @abstractmethod
    def form_session_id(self) -> str:
        pass

    @property
    @abstractmethod
    def pain_areas(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def bind_store(self, store: IPainAreaStore) -> None:
        """Mirror the current store contents and every later mutation into ``pain_areas``."""
        pass

    @abstractmethod
    def restore_into(self, store: IPainAreaStore) -> Result[bool]:
        """Load ``pain_areas`` back into a store."""
        pass

    @abstractmethod
    def set_pain_map_image(self, view: Union[View, str], path: str) -> None:
        pass

    @abstractmethod
    def get_pain_map_image(self, view: Union[View, str]) -> Optional[str]:
        pass

    @abstractmethod
    def pain_area_records(self) -> List[PainAreaRecord]:
        pass

    @abstractmethod
    def is_pain_mapping_complete(self) -> bool:
        pass

    @abstractmethod
    def highest_pain_intensity(self) -> int:
        pass

    @abstractmethod
    def describe_pain_areas(self) -> str:
        """Plain-text pain area block handed to the summary service."""
        pass

    @abstractmethod
    def to_document(self) -> Dict[str, Any]:
        pass
