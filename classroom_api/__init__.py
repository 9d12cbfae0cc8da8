"""
Classroom API
CRUD REST API for teachers and their students, with GitHub login.

Architecture:
- MongoDB: teachers, students (referencing a teacher), users
- FastAPI: HTTP surface and generated Swagger docs
- GitHub OAuth: login; the session is a signed token in a cookie
"""

__version__ = "1.0.0"
