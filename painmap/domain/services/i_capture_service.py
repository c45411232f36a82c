# painmap/domain/services/i_capture_service.py
"""
Pain map capture service interface.

Defines how the rendered body map (image plus markers) is turned into an
image file stored with the assessment.
"""
from abc import ABC, abstractmethod
from typing import Any, Union

from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import View


class IPainMapCaptureService(ABC):

    @abstractmethod
    def capture_widget(self, widget: Any) -> Result[Any]:
        """
        Render a widget into an image.

        Args:
            widget: The widget showing the body map and its markers

        Returns:
            Result containing the captured image on success
        """
        pass

    @abstractmethod
    def save_pain_map(self, image: Any, view: Union[View, str], form_session_id: str) -> Result[str]:
        """
        Save a captured pain map into the session's directory.

        Args:
            image: Captured image
            view: Body view the image shows
            form_session_id: Session the image belongs to

        Returns:
            Result containing the path relative to the capture directory
        """
        pass

    @abstractmethod
    def capture_and_save(self, widget: Any, view: Union[View, str], form_session_id: str) -> Result[str]:
        pass
