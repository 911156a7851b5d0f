"""Optional, best-effort narrative augmentation over HTTP.

The gateway is attempted once per request with a bounded timeout. Every
failure is logged and reported as ``None``; callers always hold the
rule-based narrative and never see an augmentation error.
"""

from __future__ import annotations

import logging
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Optional

import requests

from emotion_engine import config
from emotion_engine.schema import EmotionBreakdown, ViewGranularity

logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="augmentation")


class AugmentationFailure(RuntimeError):
    """Timeout, non-success response or malformed payload from the gateway."""


@dataclass(frozen=True)
class AugmentationRequest:
    breakdown: EmotionBreakdown
    task_count: int
    view: ViewGranularity
    max_length: int = config.AUGMENTATION_MAX_LENGTH

    def to_payload(self) -> dict:
        return {
            "breakdown": self.breakdown.as_dict(),
            "taskCount": self.task_count,
            "view": self.view.value,
            "maxLength": self.max_length,
        }


@dataclass(frozen=True)
class AugmentationResult:
    text: str
    keywords: tuple[str, ...] = ()


def parse_response(payload, max_length: int) -> AugmentationResult:
    """Validate a gateway response body, raising AugmentationFailure when malformed."""

    if not isinstance(payload, dict):
        raise AugmentationFailure("response body is not a JSON object")

    text = payload.get("text")
    if not isinstance(text, str) or not text.strip():
        raise AugmentationFailure("response has no text")
    text = text.strip()
    if len(text) > max_length:
        raise AugmentationFailure(f"text is {len(text)} chars, limit is {max_length}")

    keywords = payload.get("keywords", [])
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        raise AugmentationFailure("keywords must be a list of strings")

    return AugmentationResult(text=text, keywords=tuple(k.strip() for k in keywords if k.strip()))


class AugmentationGateway:
    def __init__(self, url: str, api_key: str = "", timeout: float = config.AUGMENTATION_TIMEOUT_SECONDS):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_config(cls) -> Optional["AugmentationGateway"]:
        """Build a gateway from configuration, or None when none is configured."""

        if not config.AUGMENTATION_URL:
            logger.debug("No augmentation gateway configured; using rule-based narratives")
            return None
        return cls(config.AUGMENTATION_URL, config.AUGMENTATION_API_KEY, config.AUGMENTATION_TIMEOUT_SECONDS)

    def request(self, augmentation_request: AugmentationRequest) -> AugmentationResult:
        """Make a single call to the gateway. Raises AugmentationFailure."""

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = requests.post(
                self.url,
                json=augmentation_request.to_payload(),
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as exc:
            raise AugmentationFailure(f"timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise AugmentationFailure(str(exc)) from exc
        except ValueError as exc:
            raise AugmentationFailure("response body is not valid JSON") from exc

        return parse_response(payload, augmentation_request.max_length)

    def try_augment(self, augmentation_request: AugmentationRequest) -> Optional[AugmentationResult]:
        try:
            return self.request(augmentation_request)
        except AugmentationFailure as exc:
            logger.info(f"Augmentation unavailable, keeping rule-based narrative: {exc}")
            return None

    def submit(self, augmentation_request: AugmentationRequest) -> Future:
        """Run ``try_augment`` in the background; the future never raises."""

        return _executor.submit(self.try_augment, augmentation_request)

    def augment_within_budget(self, augmentation_request: AugmentationRequest) -> Optional[AugmentationResult]:
        """Wait at most ``timeout`` seconds in total, including a slowly streamed body."""

        result = resolve_augmentation(self.submit(augmentation_request), wait=self.timeout)
        if result is None:
            logger.debug("No augmentation within budget")
        return result


def augmentation_available(gateway: Optional[AugmentationGateway]) -> bool:
    return gateway is not None and bool(gateway.url)


def resolve_augmentation(future: Optional[Future], wait: float = 0.0) -> Optional[AugmentationResult]:
    """Collect a submitted augmentation if it finishes within ``wait`` seconds.

    An unfinished call is cancelled when possible and reported as None.
    """

    if future is None:
        return None
    try:
        return future.result(timeout=wait)
    except FutureTimeoutError:
        future.cancel()
        return None
    except CancelledError:
        return None
