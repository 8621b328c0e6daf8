"""
Upload/analysis controller.

Holds the UI state of one browser session and applies user actions to it:
loading the bundled sample, uploading a photo, and (re-)running the analysis.
Every error is caught here, logged, and turned into `state.error`; nothing
propagates to the caller.
"""
import threading
import uuid
from collections import OrderedDict
from typing import Callable

from pydantic import BaseModel

from ai_client import analyze_image
from coin_content import (
    COIN_PROMPT,
    DEFAULT_ANALYSIS,
    DEFAULT_IMAGE_PATH,
    MAX_SESSION_IMAGE_BYTES,
    MAX_SESSIONS,
    MSG_ANALYZE_FAILED,
)
from error_log import log_error
from errors import CoinAppError
from image_processor import load_image_file, read_upload, validate_upload

Analyzer = Callable[[str, str], str]


class UiState(BaseModel):
    image:      str | None = None   # data URI
    analysis:   str        = ""
    is_loading: bool       = False
    error:      str | None = None


class CoinController:
    def __init__(
        self,
        analyzer: Analyzer = analyze_image,
        default_image_path: str = DEFAULT_IMAGE_PATH,
        prompt: str = COIN_PROMPT,
    ):
        self.analyzer           = analyzer
        self.default_image_path = default_image_path
        self.prompt             = prompt
        self.state              = UiState()

    def load_default(self) -> UiState:
        """Show the bundled sample image with the canned analysis (no AI call)."""
        self.state.is_loading = True
        try:
            image = load_image_file(self.default_image_path)
        except CoinAppError as e:
            log_error("load_default", e)
            self.state.error = e.message
        else:
            self.state.image    = image
            self.state.analysis = DEFAULT_ANALYSIS
        finally:
            self.state.is_loading = False
        return self.state

    def handle_upload(self, file) -> UiState:
        """Validate and read an uploaded photo, then analyze it."""
        if file is None or not file.filename:
            return self.state

        try:
            validate_upload(file)
            self.state.is_loading = True
            try:
                image = read_upload(file)
            finally:
                self.state.is_loading = False
        except CoinAppError as e:
            log_error(f"upload kind={e.kind}", e)
            self.state.error = e.message
            return self.state

        self.state.image = image
        self.state.error = None
        return self.analyze(image)

    def analyze(self, image_data_uri: str) -> UiState:
        """Run the AI on `image_data_uri`; the last call to finish wins."""
        self.state.is_loading = True
        self.state.error      = None
        try:
            self.state.analysis = self.analyzer(image_data_uri, self.prompt)
        except Exception as e:
            log_error("analyze", e)
            message = e.message if isinstance(e, CoinAppError) else str(e)
            self.state.error = message or MSG_ANALYZE_FAILED
        finally:
            self.state.is_loading = False
        return self.state

    def reanalyze(self) -> UiState:
        if not self.state.image:
            return self.state
        return self.analyze(self.state.image)


class ControllerRegistry:
    """
    In-memory session id → controller map, least recently used evicted first.

    Bounded both by session count and by the total size of the held image
    data URIs. All access goes through one lock shared by request threads.
    """

    def __init__(
        self,
        factory: Callable[[], CoinController] = CoinController,
        max_sessions: int = MAX_SESSIONS,
        max_image_bytes: int = MAX_SESSION_IMAGE_BYTES,
    ):
        self.factory         = factory
        self.max_sessions    = max_sessions
        self.max_image_bytes = max_image_bytes
        self._controllers: "OrderedDict[str, CoinController]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._controllers)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._controllers

    def new_session_id(self) -> str:
        return uuid.uuid4().hex

    def default_controller(self) -> CoinController:
        """A controller showing the bundled sample, not registered to any session."""
        controller = self.factory()
        controller.load_default()
        return controller

    def peek(self, session_id: str) -> CoinController | None:
        """Return the session's controller if registered, without creating one."""
        with self._lock:
            controller = self._controllers.get(session_id)
            if controller is not None:
                self._controllers.move_to_end(session_id)
            return controller

    def get(self, session_id: str) -> CoinController:
        """Return the session's controller, creating it (with the sample loaded) if new."""
        with self._lock:
            controller = self._controllers.get(session_id)
            if controller is None:
                controller = self.default_controller()
                self._controllers[session_id] = controller
            self._evict(keep=session_id)
            return controller

    def trim(self, keep: str) -> None:
        """Re-apply the limits after `keep`'s image may have grown."""
        with self._lock:
            self._evict(keep=keep)

    def image_bytes(self) -> int:
        with self._lock:
            return self._image_bytes()

    def _image_bytes(self) -> int:
        return sum(len(c.state.image or "") for c in self._controllers.values())

    def _evict(self, keep: str) -> None:
        if keep in self._controllers:
            self._controllers.move_to_end(keep)
        while len(self._controllers) > 1 and (
            len(self._controllers) > self.max_sessions
            or self._image_bytes() > self.max_image_bytes
        ):
            self._controllers.popitem(last=False)
