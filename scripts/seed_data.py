"""Populate a running service with random users, animals and training logs."""

import argparse
import asyncio
import logging
import random
import secrets
import sys
from datetime import UTC, datetime, timedelta

import httpx

logger = logging.getLogger("seed_data")

FIRST_NAMES = ["Ada", "Grace", "Alan", "Edsger", "Barbara", "Ken", "Margaret", "Linus"]
LAST_NAMES = ["Lovelace", "Hopper", "Turing", "Dijkstra", "Liskov", "Thompson", "Hamilton"]
ANIMAL_NAMES = ["Rex", "Bella", "Milo", "Luna", "Scout", "Daisy", "Ranger", "Pepper"]
ACTIVITIES = ["Recall", "Heel", "Agility course", "Loose-leash walking", "Crate training"]


def random_past_date(max_days: int = 365) -> str:
    return (datetime.now(UTC) - timedelta(days=random.randint(1, max_days))).isoformat()


def random_user() -> dict:
    first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
    user = {
        "firstName": first,
        "lastName": last,
        "email": f"{first}.{last}.{secrets.token_hex(4)}@example.com".lower(),
        "password": secrets.token_urlsafe(12),
    }
    if random.random() > 0.5:
        user["profilePicture"] = "https://example.com/profile.jpg"
    return user


def random_animal(owner_ids: list[str]) -> dict:
    animal = {
        "name": random.choice(ANIMAL_NAMES),
        "hoursTrained": random.randint(0, 100),
        "owner": random.choice(owner_ids),
        "dateOfBirth": random_past_date(365 * 10),
    }
    if random.random() > 0.5:
        animal["profilePicture"] = "https://example.com/animal.jpg"
    return animal


def random_training_log(animal_ids: list[str], user_ids: list[str]) -> dict:
    log = {
        "date": random_past_date(),
        "description": f"{random.choice(ACTIVITIES)} practice",
        "hours": random.randint(1, 10),
        "animal": random.choice(animal_ids),
        "user": random.choice(user_ids),
    }
    if random.random() > 0.5:
        log["trainingLogVideo"] = "https://example.com/training-log.mp4"
    return log


async def register(client: httpx.AsyncClient, user: dict) -> tuple[str, str]:
    """Register a user and return (user id, bearer token)."""
    response = await client.post("/api/users", json=user)
    response.raise_for_status()
    user_id = response.json()["id"]

    response = await client.post(
        "/api/user/verify", json={"email": user["email"], "password": user["password"]}
    )
    response.raise_for_status()
    return user_id, response.text


async def seed(base_url: str, count: int) -> None:
    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        registered = await asyncio.gather(*(register(client, random_user()) for _ in range(count)))
        user_ids = [user_id for user_id, _ in registered]
        headers = {"Authorization": f"Bearer {registered[0][1]}"}
        logger.info(f"Registered {len(user_ids)} users")

        responses = await asyncio.gather(
            *(
                client.post("/api/animals", json=random_animal(user_ids), headers=headers)
                for _ in range(count)
            )
        )
        animal_ids = [r.raise_for_status().json()["id"] for r in responses]
        logger.info(f"Created {len(animal_ids)} animals")

        responses = await asyncio.gather(
            *(
                client.post(
                    "/api/training",
                    json=random_training_log(animal_ids, user_ids),
                    headers=headers,
                )
                for _ in range(count)
            )
        )
        for r in responses:
            r.raise_for_status()
        logger.info(f"Created {len(responses)} training logs")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--base-url", default="http://localhost:3000", help="Service URL")
    parser.add_argument("--count", type=positive_int, default=10, help="Records per collection")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        asyncio.run(seed(args.base_url, args.count))
    except httpx.HTTPError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
