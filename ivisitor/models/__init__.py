# iVisitor — Database Models
# Import all models here for SQLAlchemy discovery

from ivisitor.models.resident import Resident   # noqa
from ivisitor.models.visitor import Visitor     # noqa
