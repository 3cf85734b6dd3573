import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Callable, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import func, select

from app.core.config import DirectoryConfig
from app.db.database import Database
from app.models.instructor import InstructorStatus
from app.services.geocoder import GoogleMapsGeocoder
from app.services.instructor_account import InstructorAccount, encode_recoverable
from app.services.postcode import first_name, format_postcodes, is_postcode_area, small_postcode

logger = logging.getLogger(__name__)

# earth radius in miles
EARTH_RADIUS_MILES = 3959
COVER_DISTANCE_MILES = 100
LOCAL_DISTANCE_MILES = 15
COUNTRY_SUFFIX = ", UK"
OPTIONAL_TEXT_FIELDS = ("about", "offers", "notes", "postcodes")

GeocoderFactory = Callable[..., GoogleMapsGeocoder]


def _is_numeric(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and value.strip().isdigit()


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class InstructorDirectory:
    """
    Driving instructor records: registration, profile and location updates,
    proximity search and the priority listing slot.

    Constructing a directory clears any priority slot older than the
    configured period.
    """

    def __init__(
        self,
        db: Database,
        config: Optional[DirectoryConfig] = None,
        account: Optional[InstructorAccount] = None,
        geocoder_factory: GeocoderFactory = GoogleMapsGeocoder,
    ):
        self.db = db
        self.config = config or DirectoryConfig()
        self.account = account or InstructorAccount(db, self.config.tables)
        self.geocoder_factory = geocoder_factory
        self.remove_priorities()

    @property
    def instructor_table(self) -> str:
        return self.config.instructor_table

    @property
    def testimonial_table(self) -> str:
        return self.config.testimonial_table

    def set_api_key(self, key: str):
        self.config.api_key = key
        return self

    def get_api_key(self):
        if isinstance(self.config.api_key, str):
            return self.config.api_key
        return False

    def instructor_status(self, status):
        try:
            return InstructorStatus(int(status)).label
        except (TypeError, ValueError):
            return False

    def get_all_instructors(self, active=1):
        return self.db.select_all(self.instructor_table, {"active": int(active)}, "*", [("fino", "DESC")])

    def get_instructor_info(self, fino):
        if not _is_numeric(fino):
            return False
        return self.db.select(self.instructor_table, {"fino": int(fino)})

    def email_in_use(self, email, fino=None) -> bool:
        """True if another instructor already registered ``email``."""
        existing = self.db.select(self.instructor_table, {"email": email}, ["fino"])
        if not existing:
            return False
        return fino is None or existing["fino"] != int(fino)

    def add_instructor(self, fino, name, email, domain, gender, password, extra=None):
        """
        Register a new instructor.

        Returns False if the franchise number is taken or not numeric, the
        email is malformed or already registered, or ``extra`` is not a mapping.
        """
        if extra is None:
            extra = {}
        if not _is_numeric(fino) or not isinstance(extra, Mapping):
            return False
        if self.get_instructor_info(fino):
            return False
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return False
        if self.email_in_use(email):
            return False

        extra = dict(extra)
        extra.pop("fino", None)
        for key in OPTIONAL_TEXT_FIELDS:
            if key in extra and _is_blank(extra[key]):
                extra[key] = None
        fields = {
            "fino": int(fino),
            "name": name,
            "gender": gender,
            "email": email,
            "website": domain,
            "password": self.account.get_hash(password),
            "password_base": encode_recoverable(password),
        }
        fields.update(extra)
        added = self.db.insert(self.instructor_table, fields)
        if added:
            logger.info("Registered instructor %s", fields["fino"])
        return added

    def update_instructor(self, fino, information=None):
        information = dict(information or {})
        # franchise number never changes
        information.pop("fino", None)
        for key in OPTIONAL_TEXT_FIELDS:
            if key in information and _is_blank(information[key]):
                information[key] = None
        if information.get("email") and self.email_in_use(information["email"], fino):
            return False
        return self.db.update(self.instructor_table, information, {"fino": fino})

    def update_instructor_personal_information(self, fino, information=None):
        information = {key: (None if _is_blank(value) else value) for key, value in (information or {}).items() if key != "fino"}
        if information.get("email") and self.email_in_use(information["email"], fino):
            return False
        return self.db.update(self.instructor_table, information, {"fino": fino})

    def _geocode(self, postcode: str, format: str = "json"):
        maps = self.geocoder_factory(f"{postcode}{COUNTRY_SUFFIX}", format)
        if self.get_api_key() is not False:
            maps.set_api_key(self.get_api_key())
        maps.geocode()
        return maps

    def update_instructor_location(self, fino, postcode: str):
        maps = self._geocode(postcode)
        if maps.get_latitude():
            return self.db.update(
                self.instructor_table,
                {"lat": maps.get_latitude(), "lng": maps.get_longitude()},
                {"fino": fino},
            )
        logger.warning("Could not locate %r for instructor %s", postcode, fino)
        return False

    def get_instructors(self, where=None, limit=50, active=True):
        where = dict(where or {})
        if active is True:
            where["active"] = 1
        return self.list_instructors(
            self.db.select_all(self.instructor_table, where, "*", [("priority", "DESC"), Database.RANDOM], limit)
        )

    def find_closest_instructors(self, postcode: str, limit=50, cover=True, has_offer=False):
        """Nearest active instructors to a postcode, falling back to the coverage lists if it cannot be geocoded."""
        maps = self._geocode(postcode, "xml")
        if not maps.get_latitude():
            logger.warning("Geocoding %r failed, searching by postcode area", postcode)
            return self.find_instructors_by_postcode(postcode, limit, has_offer)

        tbl = self.db.table(self.instructor_table)
        lat, lng = maps.get_latitude(), maps.get_longitude()
        distance = (
            EARTH_RADIUS_MILES * func.acos(
                func.cos(func.radians(lat)) * func.cos(func.radians(tbl.c.lat))
                * func.cos(func.radians(tbl.c.lng) - func.radians(lng))
                + func.sin(func.radians(lat)) * func.sin(func.radians(tbl.c.lat))
            )
        ).label("distance")

        conditions = [tbl.c.active == 1]
        if cover is True or is_postcode_area(postcode):
            conditions.append(tbl.c.postcodes.like(f"%,{small_postcode(postcode)},%"))
            threshold = COVER_DISTANCE_MILES
        else:
            threshold = LOCAL_DISTANCE_MILES

        nearby = select(tbl, distance).where(*conditions).subquery("nearby")
        ordering = [nearby.c.offer.desc()] if has_offer else []
        ordering += [nearby.c.priority.desc(), nearby.c.distance.asc()]
        stmt = select(nearby).where(nearby.c.distance < threshold).order_by(*ordering)
        if limit:
            stmt = stmt.limit(int(limit))
        return self.list_instructors(self.db.query(stmt))

    def find_instructors_by_postcode(self, postcode: str, limit=50, has_offer=False):
        order_by = [("offer", "DESC")] if has_offer else []
        order_by += [("priority", "DESC"), Database.RANDOM]
        where = {"active": 1, "postcodes": ("LIKE", f"%,{small_postcode(postcode)},%")}
        return self.list_instructors(self.db.select_all(self.instructor_table, where, "*", order_by, limit))

    def find_closest_instructor_with_offer(self, postcode: str, limit=50, cover=True):
        return self.find_closest_instructors(postcode, limit, cover, True)

    def list_instructors(self, instructors):
        if not isinstance(instructors, list):
            return False
        for instructor in instructors:
            instructor["postcodes"] = format_postcodes(instructor.get("postcodes"))
            instructor["firstname"] = first_name(instructor.get("name"))
            instructor["testimonials"] = self.inst_testimonials(instructor["fino"])
        return instructors

    def add_priority(self, fino):
        if not _is_numeric(fino):
            return False
        updated = self.db.update(
            self.instructor_table,
            {"priority": 1, "priority_start_date": datetime.now()},
            {"fino": int(fino)},
        )
        if updated:
            logger.info("Priority listing started for instructor %s", fino)
        return updated

    def remove_priorities(self):
        """Clear priority slots that started longer ago than the priority period."""
        cutoff = datetime.now() - self.config.priority_period
        expired = self.db.select_all(
            self.instructor_table, {"priority": 1, "priority_start_date": ("<=", cutoff)}, ["fino"]
        )
        if not expired:
            return False
        self.db.update(
            self.instructor_table,
            {"priority": 0, "priority_start_date": None},
            {"priority": 1, "priority_start_date": ("<=", cutoff)},
        )
        logger.info("Cleared %d expired priority listings", len(expired))
        return True

    def inst_testimonials(self, fino, limit=5):
        if self.config.display_testimonials is True:
            return self.db.select_all(self.testimonial_table, {"fino": int(fino)}, "*", Database.RANDOM, int(limit))
        return False
