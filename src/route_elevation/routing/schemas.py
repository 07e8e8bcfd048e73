"""Pydantic schemas for canonical routing requests."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from route_elevation.exceptions import InvalidCoordinateError

# Keys a JSON routing request carries as dedicated fields; every other
# top-level key is a routing hint.
_REQUEST_KEYS = frozenset(
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
        "path_details",
        "custom_model",
        "hints",
    }
)


class GeoPoint(BaseModel):
    """A latitude/longitude pair with optional elevation in meters."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    elevation: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_json_forms(cls, data: Any) -> Any:
        # [lon, lat] or [lon, lat, ele] as in GeoJSON
        if isinstance(data, (list, tuple)):
            if len(data) not in (2, 3):
                raise ValueError("A point must be [lon, lat] or [lon, lat, ele]")
            point = {"longitude": data[0], "latitude": data[1]}
            if len(data) == 3:
                point["elevation"] = data[2]
            return point
        if isinstance(data, dict) and "lat" in data:
            return {
                "latitude": data["lat"],
                "longitude": data.get("lon", data.get("lng")),
                "elevation": data.get("ele"),
            }
        return data

    @property
    def is_3d(self) -> bool:
        return self.elevation is not None

    @classmethod
    def parse(cls, location: str) -> "GeoPoint":
        """Parse a 'lat,lon' query string into a GeoPoint.

        Args:
            location: Comma-separated latitude and longitude, e.g. '51.5,-0.1'.

        Returns:
            A two-dimensional GeoPoint.

        Raises:
            InvalidCoordinateError: If the format is wrong or values are out of range.
        """
        try:
            lat_str, lon_str = location.split(",")
            latitude = float(lat_str.strip())
            longitude = float(lon_str.strip())
        except ValueError as exc:
            raise InvalidCoordinateError(
                f"Invalid point format: '{location}'. Expected 'latitude,longitude'."
            ) from exc

        if not (-90 <= latitude <= 90):
            raise InvalidCoordinateError(
                f"Invalid latitude: {latitude}. Must be between -90 and 90."
            )
        if not (-180 <= longitude <= 180):
            raise InvalidCoordinateError(
                f"Invalid longitude: {longitude}. Must be between -180 and 180."
            )

        return cls(latitude=latitude, longitude=longitude)


class RoutingRequest(BaseModel):
    """Canonical request handed to the routing engine.

    Instances are frozen; normalization derives new ones with
    ``model_copy(update=...)``. ``snap_preventions`` is ``None`` when the
    caller did not supply any, which is different from an explicit empty
    list.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    points: list[GeoPoint] = Field(default_factory=list)
    profile: str = ""
    algorithm: str = ""
    locale: str = "en"
    headings: list[float] = Field(default_factory=list)
    point_hints: list[str] = Field(default_factory=list)
    curbsides: list[str] = Field(default_factory=list)
    snap_preventions: list[str] | None = None
    path_details: list[str] = Field(default_factory=list, alias="details")
    custom_model: dict[str, Any] | None = None
    hints: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_hints(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        fields = {
            key: value
            for key, value in data.items()
            if key in _REQUEST_KEYS and not (key in ("profile", "algorithm", "locale") and value is None)
        }
        extra_hints = {key: value for key, value in data.items() if key not in _REQUEST_KEYS}
        if extra_hints or fields.get("hints", {}) is None:
            fields["hints"] = {**(data.get("hints") or {}), **extra_hints}
        return fields

    @property
    def has_snap_preventions(self) -> bool:
        return bool(self.snap_preventions)
