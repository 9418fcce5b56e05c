# import all models for Alembic
from app.db.models.user import User
from app.db.models.project import Project
from app.db.models.production import ProductionEntry
from app.db.models.qc import QCInspection, QCInspectionItem, QCIssue
from app.db.models.refusal import PileRefusal
