from app.db.repositories.user_repository import UserRepository
from app.db.repositories.category_repository import CategoryRepository
from app.db.repositories.service_repository import ServiceRepository
from app.db.repositories.review_repository import ReviewRepository, ServiceReviewRepository
from app.db.repositories.notification_repository import NotificationRepository
