# app/db/models/__init__.py
from app.db.models.user import User
from app.db.models.category import Category
from app.db.models.service import Service
from app.db.models.review import Review, ServiceReview
from app.db.models.notification import Notification
