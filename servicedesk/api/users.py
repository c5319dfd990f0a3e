from servicedesk.api.client import ApiClient
from servicedesk.core.logging import logger
from servicedesk.core.security import Role
from servicedesk.schemas.users import User, UserCreate, UserFilters, UserStats, UserUpdate


def get_user_stats(client: ApiClient) -> UserStats:
    return UserStats.model_validate(client.get("/api/users/stats"))


def list_users(client: ApiClient, filters: UserFilters | None = None) -> list[User]:
    params = filters.to_wire() if filters is not None else None
    data = client.get("/api/users", params=params)
    return [User.model_validate(u) for u in data or []]


def get_user(client: ApiClient, user_id: int) -> User:
    return User.model_validate(client.get(f"/api/users/{user_id}"))


def create_user(client: ApiClient, payload: UserCreate) -> User:
    user = User.model_validate(client.post("/api/users", json=payload.to_wire()))
    logger.info("user_created", user_id=user.id, role=user.role.value)
    return user


def update_user(client: ApiClient, user_id: int, payload: UserUpdate) -> User:
    return User.model_validate(client.put(f"/api/users/{user_id}", json=payload.to_wire()))


def update_user_role(client: ApiClient, user_id: int, role: Role) -> User:
    user = User.model_validate(client.patch(f"/api/users/{user_id}/role", json={"role": Role(role).value}))
    logger.info("user_role_changed", user_id=user_id, role=user.role.value)
    return user


def set_user_enabled(client: ApiClient, user_id: int, enabled: bool) -> User:
    user = User.model_validate(client.patch(f"/api/users/{user_id}/status", json={"enabled": enabled}))
    logger.info("user_status_changed", user_id=user_id, enabled=user.enabled)
    return user


def delete_user(client: ApiClient, user_id: int) -> None:
    client.delete(f"/api/users/{user_id}")
    logger.info("user_deleted", user_id=user_id)


def email_exists(client: ApiClient, email: str) -> bool:
    data = client.post("/api/users/email-exists", json={"email": email})
    return bool(isinstance(data, dict) and data.get("exists"))
