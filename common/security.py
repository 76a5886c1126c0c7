"""Общие функции безопасности для всех сервисов."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt


bearer_scheme = HTTPBearer(auto_error=True)


@dataclass
class CurrentUser:
	"""Текущий пользователь из JWT токена."""
	id: str
	role: str
	token: str
	email: str | None = None
	phone: str | None = None

	@property
	def is_admin(self) -> bool:
		return self.role == "admin"


def decode_access_token(
	token: str,
	jwt_secret: str,
	jwt_algorithm: str = "HS256",
) -> CurrentUser:
	"""
	Декодирует и валидирует access токен.

	Args:
		token: JWT токен
		jwt_secret: Секретный ключ для подписи токена
		jwt_algorithm: Алгоритм подписи (по умолчанию HS256)

	Returns:
		CurrentUser: Объект пользователя из claims токена

	Raises:
		HTTPException: 401, если токен невалиден, истек или имеет неверный тип
	"""
	try:
		payload = jwt.decode(token, jwt_secret, algorithms=[jwt_algorithm])
	except JWTError:
		raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

	if payload.get("type") != "access":
		raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")

	exp = payload.get("exp")
	if exp and datetime.fromtimestamp(exp, tz=timezone.utc) < datetime.now(timezone.utc):
		raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Token expired")

	sub = payload.get("sub")
	role = payload.get("role")
	if not sub or not role:
		raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

	return CurrentUser(
		id=str(sub),
		role=role,
		token=token,
		email=payload.get("email"),
		phone=payload.get("phone"),
	)


def make_get_current_user(
	get_settings: Callable,
) -> Callable:
	"""
	Создает зависимость ``get_current_user``.

	Args:
		get_settings: Функция, возвращающая настройки с jwt_secret и jwt_algorithm

	Returns:
		Зависимость, превращающая bearer токен в CurrentUser
	"""
	async def get_current_user(
		credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
	) -> CurrentUser:
		settings = get_settings()
		return decode_access_token(
			credentials.credentials,
			settings.jwt_secret,
			settings.jwt_algorithm,
		)

	return get_current_user


def make_require_role(
	get_current_user: Callable,
	role: str,
) -> Callable:
	"""Создает зависимость, пропускающую только пользователей с указанной ролью."""
	async def require_role(
		current_user: CurrentUser = Depends(get_current_user),
	) -> CurrentUser:
		if current_user.role != role:
			raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
		return current_user

	return require_role
