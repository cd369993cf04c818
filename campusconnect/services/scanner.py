"""
Ticket scanner state machine, independent of any rendering surface.

States: IDLE -> SCANNING -> RESULT_SHOWN -> (scan_another) -> SCANNING ...

A ``ScannerSession`` owns the camera for its lifetime: it is acquired on
``__aenter__`` and released on ``__aexit__`` whatever happens inside. The
polling loop waits for a frame with real dimensions before decoding, stops
itself on the first decoded code, and hands the text to the dispatcher
(normally ``AttendanceVerifier.verify``).
"""
import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, Union

from campusconnect.schemas.attendance import ScanOutcome, ScanResult

logger = logging.getLogger(__name__)


class ScannerState(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    RESULT_SHOWN = "result_shown"


@dataclass
class Frame:
    width: int
    height: int
    data: bytes = b""

    @property
    def has_dimensions(self) -> bool:
        return self.width > 0 and self.height > 0


class Camera(Protocol):
    async def open(self) -> None: ...

    async def read_frame(self) -> Optional[Frame]: ...

    async def close(self) -> None: ...


CodeDecoder = Callable[[Frame], Optional[str]]
Dispatcher = Callable[[str], Union[ScanResult, Awaitable[ScanResult]]]


class ScannerError(Exception):
    pass


class CameraNotReadyError(ScannerError):
    """No frame with non-zero dimensions arrived within the timeout."""


class ScannerSession:

    def __init__(
        self,
        camera: Camera,
        decoder: CodeDecoder,
        dispatch: Dispatcher,
        poll_interval: float = 1 / 30,
        frame_timeout: float = 5.0,
    ):
        self.camera = camera
        self.decoder = decoder
        self.dispatch = dispatch
        self.poll_interval = poll_interval
        self.frame_timeout = frame_timeout
        self.state = ScannerState.IDLE
        self.result: Optional[ScanResult] = None
        self._camera_open = False

    async def __aenter__(self) -> "ScannerSession":
        await self.camera.open()
        self._camera_open = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()

    async def release(self) -> None:
        if self._camera_open:
            self._camera_open = False
            await self.camera.close()
            logger.info("Camera released")
        self.state = ScannerState.IDLE

    @property
    def current_outcome(self) -> Optional[ScanOutcome]:
        if self.state == ScannerState.SCANNING:
            return ScanOutcome.SCANNING
        if self.state == ScannerState.RESULT_SHOWN and self.result is not None:
            return self.result.outcome
        return None

    async def wait_for_frame(self) -> Frame:
        """Block until the camera yields a frame with real dimensions."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.frame_timeout
        while True:
            frame = await self.camera.read_frame()
            if frame is not None and frame.has_dimensions:
                return frame
            if loop.time() >= deadline:
                raise CameraNotReadyError("Camera did not produce a usable frame")
            await asyncio.sleep(self.poll_interval)

    async def scan(self) -> ScanResult:
        """Run one scan cycle: poll until a code is decoded, then dispatch it."""
        if not self._camera_open:
            raise ScannerError("Scanner session is not active")
        if self.state == ScannerState.RESULT_SHOWN:
            raise ScannerError("Call scan_another() before scanning again")

        self.state = ScannerState.SCANNING
        self.result = None

        frame = await self.wait_for_frame()
        while True:
            if frame is not None and frame.has_dimensions:
                code = self.decoder(frame)
                if code is not None:
                    break
            await asyncio.sleep(self.poll_interval)
            frame = await self.camera.read_frame()

        # Stop polling before the payload is dispatched
        self.state = ScannerState.RESULT_SHOWN
        try:
            result = self.dispatch(code)
            if asyncio.iscoroutine(result):
                result = await result
        except Exception:
            self.state = ScannerState.IDLE
            raise
        self.result = result
        logger.info(f"Scan finished with outcome {result.outcome.value}")
        return result

    async def scan_another(self) -> ScanResult:
        if self.state != ScannerState.RESULT_SHOWN:
            raise ScannerError("There is no result to dismiss")
        self.result = None
        self.state = ScannerState.IDLE
        return await self.scan()
