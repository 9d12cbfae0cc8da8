"""
Models module - entity schemas used to validate records before persistence.

Difference from schemas:
- Models: what may be stored (Teacher, Student validation rules)
- Schemas: API contract (what client receives)
"""

from classroom_api.models.base import ValidationMode
from classroom_api.models.teacher import validate_teacher
from classroom_api.models.student import validate_student

__all__ = ["ValidationMode", "validate_teacher", "validate_student"]
