from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFoundError, InvalidInputError
from storefront.domain.schemas import (
    UserRegister,
    UserLogin,
    UserRead,
    AuthOut,
    AdminUserCreate,
    AdminUserUpdate,
)
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger
from storefront.utils.security import hash_password, verify_password, create_access_token

logger = get_logger(__name__)

ROLES = ("customer", "admin")


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def _auth_response(self, user: UserModel) -> AuthOut:
        return AuthOut(
            user=UserRead.model_validate(user),
            token=create_access_token(user.id, user.role),
        )

    def _create(self, name: str, email: str, password: str, role: str) -> UserModel:
        if role not in ROLES:
            raise InvalidInputError(f"Invalid role: {role}")

        if self.repo.get_by_email(email):
            raise InvalidInputError("User already exists")

        return self.repo.create_user(
            UserModel(
                name=name,
                email=email.lower(),
                password_hash=hash_password(password),
                role=role,
            )
        )

    def register(self, payload: UserRegister) -> AuthOut:
        user = self._create(payload.name, payload.email, payload.password, "customer")
        logger.info(f"Registered user {user.id}")
        return self._auth_response(user)

    def login(self, payload: UserLogin) -> AuthOut:
        user = self.repo.get_by_email(payload.email)

        # ten sam komunikat dla zlego maila i zlego hasla
        if not user or not verify_password(payload.password, user.password_hash):
            raise InvalidInputError("Invalid Credentials")

        return self._auth_response(user)

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    # admin

    def list_users(self) -> list[UserModel]:
        return self.repo.list_users()

    def create_user(self, payload: AdminUserCreate) -> UserModel:
        user = self._create(payload.name, payload.email, payload.password, payload.role or "customer")
        logger.info(f"Admin created user {user.id} with role {user.role}")
        return user

    def update_user(self, user_id: int, payload: AdminUserUpdate) -> UserModel:
        user = self.get_user(user_id)

        if payload.role and payload.role not in ROLES:
            raise InvalidInputError(f"Invalid role: {payload.role}")

        if payload.email and payload.email.lower() != user.email:
            if self.repo.get_by_email(payload.email):
                raise InvalidInputError("Email already in use")
            user.email = payload.email.lower()

        user.name = payload.name or user.name
        user.role = payload.role or user.role
        return self.repo.save(user)

    def delete_user(self, user_id: int):
        user = self.get_user(user_id)
        self.repo.delete_user(user)
        logger.info(f"User {user_id} removed")
