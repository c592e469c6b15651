"""Seed development data: a builder, a tradie and a short conversation."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from tradielink.application.dto.user import NewUserDTO
from tradielink.config import settings
from tradielink.domain.value_objects.enums import UserRole
from tradielink.infrastructure.auth.bcrypt_hasher import BcryptPasswordHasher
from tradielink.infrastructure.db.session import AsyncSessionLocal
from tradielink.infrastructure.db.uow import SqlAlchemyUoW

logger = logging.getLogger(__name__)

DEV_PASSWORD = "password123"


async def seed() -> None:
    hasher = BcryptPasswordHasher(settings.BCRYPT_ROUNDS)
    password_hash = hasher.hash(DEV_PASSWORD)

    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)

        builder = await uow.users.get_by_email("builder@example.com")
        if builder is None:
            builder = await uow.users_w.create(
                NewUserDTO(
                    role=UserRole.BUILDER,
                    first_name="Bella",
                    last_name="Builder",
                    about="Residential renovations across the inner west.",
                    email="builder@example.com",
                    password_hash=password_hash,
                    company_name="Bella Build Co",
                    address="1 Site St, Sydney NSW",
                )
            )
        tradie = await uow.users.get_by_email("tradie@example.com")
        if tradie is None:
            tradie = await uow.users_w.create(
                NewUserDTO(
                    role=UserRole.TRADIE,
                    first_name="Tom",
                    last_name="Tradie",
                    about="Licensed sparky, 8 years on the tools.",
                    email="tradie@example.com",
                    password_hash=password_hash,
                    occupation="Electrician",
                    price_per_hour=95.0,
                    experience_years=8,
                    certifications=["White Card", "Electrical Licence"],
                )
            )

        start = datetime.now(timezone.utc) - timedelta(minutes=10)
        thread, created = await uow.threads_w.get_or_create(builder.id, tradie.id, start)
        if created:
            messages_data = [
                (tradie.id, "G'day, saw your bathroom reno job. Still looking for a sparky?"),
                (builder.id, "Yes! Can you do a site visit Thursday?"),
                (tradie.id, "Thursday morning works."),
            ]
            for offset, (sender_id, body) in enumerate(messages_data, start=1):
                await uow.messages_w.append(
                    thread.id, sender_id, body, start + timedelta(minutes=offset),
                )

        await uow.commit()
        logger.info(
            "Seeded thread %d between builder %d and tradie %d (password: %s)",
            thread.id, builder.id, tradie.id, DEV_PASSWORD,
        )


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
