"""Google Maps geocoding client."""
import logging
import xml.etree.ElementTree as ET
from typing import Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode"


class GoogleMapsGeocoder:
    """Geocodes a single address.

    Usage mirrors the address-first flow of the directory: build it with the
    address, optionally set a key, call ``geocode()`` and read the coordinates.
    """

    FORMATS = ("json", "xml")

    def __init__(self, address: str, format: str = "json", client: Optional[httpx.Client] = None):
        if format not in self.FORMATS:
            raise ValueError(f"Unsupported response format: {format}")
        self.address = address
        self.format = format
        self.api_key: Optional[str] = None
        self._client = client
        self._latitude: Optional[float] = None
        self._longitude: Optional[float] = None
        self._formatted_address: Optional[str] = None

    def set_api_key(self, key: str):
        self.api_key = key
        return self

    def geocode(self):
        params = {"address": self.address}
        if self.api_key:
            params["key"] = self.api_key
        try:
            if self._client is not None:
                resp = self._client.get(f"{GEOCODE_URL}/{self.format}", params=params)
            else:
                with httpx.Client(timeout=settings.GEOCODER_TIMEOUT) as client:
                    resp = client.get(f"{GEOCODE_URL}/{self.format}", params=params)
        except httpx.HTTPError as e:
            logger.warning("Geocoding request for %r failed: %s", self.address, e)
            return False
        if resp.status_code != 200:
            logger.warning("Geocoding %r returned HTTP %s", self.address, resp.status_code)
            return False

        if self.format == "xml":
            found = self._parse_xml(resp.text)
        else:
            found = self._parse_json(resp.json())
        if not found:
            logger.info("No geocoding result for %r", self.address)
        return found

    def _parse_json(self, data: dict) -> bool:
        if data.get("status") != "OK" or not data.get("results"):
            return False
        result = data["results"][0]
        loc = result.get("geometry", {}).get("location", {})
        if "lat" not in loc or "lng" not in loc:
            return False
        self._latitude = float(loc["lat"])
        self._longitude = float(loc["lng"])
        self._formatted_address = result.get("formatted_address")
        return True

    def _parse_xml(self, body: str) -> bool:
        try:
            root = ET.fromstring(body)
        except ET.ParseError:
            logger.warning("Unparseable XML geocoding response for %r", self.address)
            return False
        if root.findtext("status") != "OK":
            return False
        result = root.find("result")
        if result is None:
            return False
        lat = result.findtext("geometry/location/lat")
        lng = result.findtext("geometry/location/lng")
        if lat is None or lng is None:
            return False
        self._latitude = float(lat)
        self._longitude = float(lng)
        self._formatted_address = result.findtext("formatted_address")
        return True

    def get_latitude(self):
        if self._latitude is None:
            return False
        return self._latitude

    def get_longitude(self):
        if self._longitude is None:
            return False
        return self._longitude

    def get_formatted_address(self):
        return self._formatted_address or False
