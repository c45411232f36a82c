# painmap/infrastructure/form/assessment_form_state.py
"""
Form-state container for the pain-mapping step of the assessment.

Keeps the ``painAreas`` list and the captured pain map image paths that are
submitted with the rest of the assessment document.
"""
import random
import string
import time
from typing import Any, Dict, List, Optional, Union

from painmap.domain.common.errors import ValidationError
from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import View
from painmap.domain.models.pain_area import PainAreaRecord
from painmap.domain.services.i_form_state_service import IAssessmentFormState
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_pain_area_store_service import IPainAreaStore

HIGH_PAIN_THRESHOLD = 5


def new_form_session_id() -> str:
    """Session id used to scope uploaded files, e.g. ``session-1718000000000-k3j9x0a``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"session-{int(time.time() * 1000)}-{suffix}"


class AssessmentFormState(IAssessmentFormState):
    """In-memory assessment state shared by the steps of one form session."""

    def __init__(self, logger: ILoggerService, form_session_id: Optional[str] = None,
                 pain_areas: Optional[List[Dict[str, Any]]] = None):
        self.logger = logger
        self._form_session_id = form_session_id or new_form_session_id()
        self._pain_areas: List[Dict[str, Any]] = list(pain_areas or [])
        self._pain_map_images: Dict[View, Optional[str]] = {View.FRONT: None, View.BACK: None}

    @property
    def form_session_id(self) -> str:
        return self._form_session_id

    @property
    def pain_areas(self) -> List[Dict[str, Any]]:
        return list(self._pain_areas)

    def bind_store(self, store: IPainAreaStore) -> None:
        """
        Mirror the store into ``pain_areas``, starting with what it holds now.

        The store replaces any areas this form was created with, so call
        restore_into first when resuming a saved document.
        """
        store.register_observer(self._on_pain_areas_changed)
        self._on_pain_areas_changed(store.list_all())

    def restore_into(self, store: IPainAreaStore) -> Result[bool]:
        try:
            records = self.pain_area_records()
        except (KeyError, TypeError, ValueError) as e:
            error = ValidationError(
                message=f"Stored pain areas are invalid: {e}",
                details={"form_session_id": self._form_session_id},
                inner_error=e
            )
            self.logger.error(str(error))
            return Result.fail(error)
        return store.replace_all(records)

    def set_pain_map_image(self, view: Union[View, str], path: str) -> None:
        view = View.parse(view)
        self._pain_map_images[view] = path
        self.logger.info("Pain map image stored", view=view.value, path=path)

    def get_pain_map_image(self, view: Union[View, str]) -> Optional[str]:
        return self._pain_map_images[View.parse(view)]

    def pain_area_records(self) -> List[PainAreaRecord]:
        return [PainAreaRecord.from_dict(area) for area in self._pain_areas]

    def is_pain_mapping_complete(self) -> bool:
        """The step is complete once at least one pain area is marked."""
        return len(self._pain_areas) > 0

    def highest_pain_intensity(self) -> int:
        return max((int(area["intensity"]) for area in self._pain_areas), default=0)

    def has_high_pain(self, threshold: int = HIGH_PAIN_THRESHOLD) -> bool:
        return any(int(area["intensity"]) >= threshold for area in self._pain_areas)

    def describe_pain_areas(self) -> str:
        if not self._pain_areas:
            return ""
        lines = ["Pain Areas Reported:"]
        for area in self._pain_areas:
            lines.append(
                f"- Region: {area['region']}, Intensity: {area['intensity']}/10, "
                f"Notes: {area.get('notes') or 'N/A'}"
            )
        return "\n".join(lines)

    def to_document(self) -> Dict[str, Any]:
        return {
            "formSessionId": self._form_session_id,
            "painAreas": self.pain_areas,
            "painMapImageFront": self._pain_map_images[View.FRONT],
            "painMapImageBack": self._pain_map_images[View.BACK],
        }

    def _on_pain_areas_changed(self, records: List[PainAreaRecord]) -> None:
        self._pain_areas = [record.to_dict() for record in records]
        self.logger.debug("Form pain areas updated", count=len(self._pain_areas))
