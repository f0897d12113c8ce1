# /eduguide/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# Importing them all here guarantees that `Base.metadata` knows every table
# before `create_all` runs at application startup.

from .base_class import Base

from .models.user_model import User
from .models.student_models import Student, LiteracyScore, Reflection
from .models.upload_models import Upload
