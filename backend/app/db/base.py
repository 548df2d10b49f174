from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.project import Project  # noqa: F401
from backend.app.models.owner import Owner  # noqa: F401
from backend.app.models.unit import Unit  # noqa: F401
from backend.app.models.lead import Lead  # noqa: F401
from backend.app.models.lead_assignment_history import LeadAssignmentHistory  # noqa: F401
from backend.app.models.lead_feedback import LeadFeedback  # noqa: F401
