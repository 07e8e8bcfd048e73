"""Routing engine backed by an upstream GraphHopper-compatible HTTP API."""

import json
import logging
import threading
from typing import Any

import requests

from route_elevation.exceptions import RoutingEngineUnavailableError, ValidationError
from route_elevation.routing.engine import EngineInfo, RoutedPath, RoutingResponse
from route_elevation.routing.schemas import GeoPoint, RoutingRequest

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 60

# Keys written from dedicated request fields; a hint never supplies them.
STRUCTURED_PAYLOAD_KEYS = frozenset(
    {
        "points",
        "profile",
        "algorithm",
        "locale",
        "headings",
        "point_hints",
        "curbsides",
        "snap_preventions",
        "details",
        "custom_model",
        "points_encoded",
    }
)


def request_payload(request: RoutingRequest) -> dict[str, Any]:
    """Serialize a routing request into the upstream JSON format.

    Hints are flattened to top-level keys, points are sent as ``[lon, lat]``
    and point encoding is switched off so elevation comes back as a plain
    third coordinate.
    """
    payload: dict[str, Any] = {
        key: value
        for key, value in request.hints.items()
        if key not in STRUCTURED_PAYLOAD_KEYS
    }
    payload.update(
        points=[[point.longitude, point.latitude] for point in request.points],
        profile=request.profile,
        locale=request.locale,
        points_encoded=False,
    )
    if request.algorithm:
        payload["algorithm"] = request.algorithm
    if request.headings:
        payload["headings"] = list(request.headings)
    if request.point_hints:
        payload["point_hints"] = list(request.point_hints)
    if request.curbsides:
        payload["curbsides"] = list(request.curbsides)
    if request.snap_preventions is not None:
        payload["snap_preventions"] = list(request.snap_preventions)
    if request.path_details:
        payload["details"] = list(request.path_details)
    if request.custom_model is not None:
        payload["custom_model"] = request.custom_model
    return payload


def _parse_path(path: dict[str, Any]) -> RoutedPath:
    coordinates = (path.get("points") or {}).get("coordinates") or []
    return RoutedPath(
        points=tuple(GeoPoint.model_validate(coordinate) for coordinate in coordinates),
        distance=float(path.get("distance", 0.0)),
        ascend=float(path.get("ascend", 0.0)),
        descend=float(path.get("descend", 0.0)),
    )


def _parse_errors(body: Any) -> tuple[str, ...]:
    if not isinstance(body, dict):
        return (str(body),)
    messages = tuple(
        str(hint["message"])
        for hint in body.get("hints") or []
        if isinstance(hint, dict) and hint.get("message")
    )
    if messages:
        return messages
    return (str(body.get("message") or "Routing failed"),)


class HttpRoutingEngine:
    """Routes requests by posting them to ``{base_url}/route``.

    ``requests.Session`` is not documented as thread-safe, so every executor
    thread gets its own session unless one is injected, in which case the
    caller owns it and it is used from every thread.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._shared_session = session
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()

    def _thread_session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session: requests.Session | None = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def route(self, request: RoutingRequest) -> RoutingResponse:
        """Route a canonical request on the upstream engine.

        Args:
            request: The normalized routing request.

        Returns:
            A RoutingResponse with either the engine's errors or its best path.

        Raises:
            ValidationError: If the request holds values JSON cannot carry,
                such as NaN or infinite numbers.
            RoutingEngineUnavailableError: If the engine is unreachable, answers
                with a server error or returns a body that is not JSON.
        """
        url = f"{self._base_url}/route"
        try:
            data = json.dumps(request_payload(request), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Routing request cannot be encoded as JSON: {exc}"
            ) from exc

        try:
            response = self._thread_session().post(
                url,
                data=data,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.error("Routing engine request failed", extra={"url": url, "error": str(exc)})
            raise RoutingEngineUnavailableError(f"Routing engine unreachable at {url}") from exc

        if response.status_code >= 500:
            raise RoutingEngineUnavailableError(
                f"Routing engine answered with HTTP {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise RoutingEngineUnavailableError("Routing engine returned invalid JSON") from exc

        if response.status_code >= 400:
            return RoutingResponse(errors=_parse_errors(body))

        paths = body.get("paths") or []
        if not paths:
            return RoutingResponse()
        return RoutingResponse(best=_parse_path(paths[0]))

    def fetch_info(self) -> EngineInfo:
        """Read profile names and the data date from ``{base_url}/info``.

        Raises:
            RoutingEngineUnavailableError: If the info endpoint cannot be read.
        """
        url = f"{self._base_url}/info"
        try:
            response = self._thread_session().get(url, timeout=self._timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise RoutingEngineUnavailableError(f"Could not read engine info from {url}") from exc

        profiles = tuple(
            str(profile["name"])
            for profile in body.get("profiles") or []
            if isinstance(profile, dict) and profile.get("name")
        )
        return EngineInfo(profiles=profiles, data_date=body.get("data_date"))

    def close(self) -> None:
        """Close every HTTP session this engine opened."""
        if self._shared_session is not None:
            self._shared_session.close()
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
