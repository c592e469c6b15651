from __future__ import annotations

import jwt
import pytest

from tradielink.application.dto.principal import Principal
from tradielink.application.dto.user import RegisterUserDTO
from tradielink.application.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)
from tradielink.domain.value_objects.enums import UserRole
from tradielink.infrastructure.auth.bcrypt_hasher import BcryptPasswordHasher
from tradielink.infrastructure.auth.hs256_verifier import HS256Verifier
from tradielink.infrastructure.auth.token_issuer import HS256Issuer
from tradielink.services import auth_service, directory_service
from tests.conftest import FakeUoW, make_builder, make_tradie

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def issuer() -> HS256Issuer:
    return HS256Issuer(SECRET)


def _builder_dto(**overrides) -> RegisterUserDTO:
    fields = dict(
        role="builder",
        first_name="Bella",
        last_name="Builder",
        about="Renovations",
        email="Bella@Example.com ",
        password="secret1",
        company_name="Bella Build Co",
        address="1 Site St",
    )
    fields.update(overrides)
    return RegisterUserDTO(**fields)


def _tradie_dto(**overrides) -> RegisterUserDTO:
    fields = dict(
        role="tradie",
        first_name="Tom",
        last_name="Tradie",
        about="Sparky",
        email="tom@example.com",
        password="secret1",
        occupation="Electrician",
        price_per_hour="95",
        experience_years="8",
        certifications="White Card, Electrical Licence, ",
    )
    fields.update(overrides)
    return RegisterUserDTO(**fields)


def test_normalize_role_accepts_labourer_alias():
    assert auth_service.normalize_role(" Builder ") == UserRole.BUILDER
    assert auth_service.normalize_role("labourer") == UserRole.TRADIE
    assert auth_service.normalize_role("tradie") == UserRole.TRADIE
    assert auth_service.normalize_role("admin") is None
    assert auth_service.normalize_role(None) is None


def test_split_certifications():
    assert auth_service.split_certifications("a, b,,c ") == ["a", "b", "c"]
    assert auth_service.split_certifications([" a ", ""]) == ["a"]
    assert auth_service.split_certifications(None) == []


def test_build_new_user_for_tradie(hasher):
    new_user = auth_service.build_new_user(_tradie_dto(), hasher)

    assert new_user.role == UserRole.TRADIE
    assert new_user.price_per_hour == 95.0
    assert new_user.experience_years == 8
    assert new_user.certifications == ["White Card", "Electrical Licence"]
    assert new_user.company_name is None
    assert hasher.verify("secret1", new_user.password_hash)


@pytest.mark.parametrize(
    ("dto", "message"),
    [
        (_builder_dto(role="admin"), "Invalid role."),
        (_builder_dto(about="  "), "Missing required profile fields."),
        (_builder_dto(email=""), "Email is required."),
        (_builder_dto(password="12345"), "Password must be at least 6 characters."),
        (_builder_dto(address=None), "Builder requires company name and address."),
        (_tradie_dto(occupation=""), "Tradie occupation is required."),
        (_tradie_dto(price_per_hour="0"), "Tradie pricePerHour must be greater than 0."),
        (_tradie_dto(price_per_hour="abc"), "Tradie pricePerHour must be greater than 0."),
        (_tradie_dto(experience_years=-1), "Tradie experienceYears must be 0 or more."),
        (_tradie_dto(certifications=" , "), "At least one certification is required."),
    ],
)
def test_build_new_user_validation(hasher, dto, message):
    with pytest.raises(InvalidInputError) as exc_info:
        auth_service.build_new_user(dto, hasher)
    assert exc_info.value.detail == message


def test_build_new_user_rejects_overlong_password(hasher):
    with pytest.raises(InvalidInputError):
        auth_service.build_new_user(_builder_dto(password="x" * 73), hasher)


@pytest.mark.asyncio
async def test_register_creates_user_and_token(hasher, issuer):
    uow = FakeUoW()

    token, user = await auth_service.register(_builder_dto(), uow, hasher, issuer)

    assert user.email == "bella@example.com"
    assert user.role == UserRole.BUILDER
    assert uow._committed is True
    principal = await HS256Verifier(SECRET).verify(token)
    assert principal == Principal(role=UserRole.BUILDER, subject_id=user.id)


@pytest.mark.asyncio
async def test_register_duplicate_email(hasher, issuer):
    uow = FakeUoW()
    await auth_service.register(_builder_dto(), uow, hasher, issuer)

    with pytest.raises(ConflictError, match="Email already registered."):
        await auth_service.register(_builder_dto(email="bella@example.com"), uow, hasher, issuer)


@pytest.mark.asyncio
async def test_login_round_trip(hasher, issuer):
    uow = FakeUoW()
    _, registered = await auth_service.register(_tradie_dto(), uow, hasher, issuer)

    token, user = await auth_service.login(" TOM@example.com ", "secret1", uow, hasher, issuer)

    assert user.id == registered.id
    assert jwt.decode(token, SECRET, algorithms=["HS256"])["sub"] == str(user.id)


@pytest.mark.asyncio
async def test_login_rejects_bad_credentials(hasher, issuer):
    uow = FakeUoW()
    await auth_service.register(_tradie_dto(), uow, hasher, issuer)

    with pytest.raises(UnauthenticatedError, match="Invalid email or password."):
        await auth_service.login("tom@example.com", "wrong-pass", uow, hasher, issuer)
    with pytest.raises(UnauthenticatedError):
        await auth_service.login("nobody@example.com", "secret1", uow, hasher, issuer)
    with pytest.raises(InvalidInputError, match="Email and password are required."):
        await auth_service.login("", "secret1", uow, hasher, issuer)


@pytest.mark.asyncio
async def test_get_me(builder_principal, builder, uow):
    assert await auth_service.get_me(builder_principal, uow) == builder

    with pytest.raises(NotFoundError):
        await auth_service.get_me(Principal(role=UserRole.BUILDER, subject_id=404), uow)


@pytest.mark.asyncio
async def test_directory_lists_by_role(uow):
    uow.add_user(make_builder(5, first_name="Aaron"))
    uow.add_user(make_tradie(6))

    builders = await directory_service.list_builders(uow)
    tradies = await directory_service.list_tradies(uow)

    assert [b.first_name for b in builders] == ["Aaron", "Bella"]
    assert {t.id for t in tradies} == {2, 6}


@pytest.mark.asyncio
async def test_verifier_rejects_unknown_role():
    token = jwt.encode({"sub": "1", "role": "admin"}, SECRET, algorithm="HS256")
    with pytest.raises(jwt.InvalidTokenError):
        await HS256Verifier(SECRET).verify(token)


def test_bcrypt_verify_handles_malformed_hash(hasher):
    assert hasher.verify("secret1", "not-a-hash") is False
