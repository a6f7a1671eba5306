"""
Sample user generation for seeding the store.
"""

from datetime import date

from faker import Faker

from dummy_api.providers.store.base import Record

DOB_START = date(1972, 1, 1)
DOB_END = date(2002, 1, 1)
THEMES = ("dark", "light")


class SampleUserGenerator:
    """
    Generates synthetic user records with Faker.

    Emails are unique within one batch and double as the record key.

    Example:
        generator = SampleUserGenerator(seed=42)
        users = generator.generate(25)
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US"):
        """
        Initialize the generator.

        Args:
            seed: Seed for reproducible output (None = random)
            locale: Faker locale
        """
        self._faker = Faker(locale)
        if seed is not None:
            self._faker.seed_instance(seed)

    def generate_one(self) -> Record:
        """Generate a single user record."""
        fake = self._faker
        email = fake.unique.email()
        return {
            "name": fake.first_name(),
            "surname": fake.last_name(),
            "email": email,
            # Rendered like JavaScript's Date.toDateString(), e.g. "Sat Jan 01 2000"
            "dob": fake.date_between(start_date=DOB_START, end_date=DOB_END).strftime(
                "%a %b %d %Y"
            ),
            "profilePicture": fake.image_url(),
            "theme": THEMES[0] if fake.boolean() else THEMES[1],
            "description": fake.paragraph(),
            "key": email,
        }

    def generate(self, count: int = 25) -> list[Record]:
        """
        Generate a batch of user records.

        Args:
            count: Number of records

        Returns:
            List of records, each with a unique email
        """
        if count < 0:
            raise ValueError("count cannot be negative")
        self._faker.unique.clear()
        return [self.generate_one() for _ in range(count)]
