# Imported for its side effect: every model is registered on Base.metadata.
from thesis_portal.models.user import User, Role  # noqa: F401
from thesis_portal.models.people import Student, Teacher  # noqa: F401
from thesis_portal.models.proposal import Proposal  # noqa: F401
from thesis_portal.models.application import Application  # noqa: F401
from thesis_portal.models.notification import StudentNotification  # noqa: F401
from thesis_portal.models.virtual_clock import VirtualClock  # noqa: F401
from thesis_portal.models.thesis_request import ThesisRequest  # noqa: F401
