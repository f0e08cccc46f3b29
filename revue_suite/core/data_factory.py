"""
Lightweight test data factory
Generates realistic but clearly-marked revue payloads
"""

from typing import List
from faker import Faker

from revue_suite.config import SuiteConfig
from revue_suite.models.revue import RevueDTO


class DataFactory:
    """Lightweight revue payload generator"""

    def __init__(self, config: SuiteConfig, seed: int = None):
        self.config = config
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)
        self.created_titles: List[str] = []

    def track_title(self, title: str):
        """Remember titles this run sent so its revues can be recognised"""
        self.created_titles.append(title)

    def generate_revue(self, **overrides) -> RevueDTO:
        """Generate a valid revue (non-empty title)"""
        data = {
            "title": f"{self.config.test_data_prefix} {self.fake.catch_phrase()}",
            "url": "",
            "description": f"Testing create revue: {self.fake.sentence()}",
        }
        data.update(overrides)
        revue = RevueDTO(**data)
        self.track_title(revue.title)
        return revue

    def generate_revue_update(self, **overrides) -> RevueDTO:
        data = {
            "title": f"Edited {self.config.test_data_prefix} {self.fake.catch_phrase()}",
            "url": "",
            "description": f"Edited description: {self.fake.sentence()}",
        }
        data.update(overrides)
        revue = RevueDTO(**data)
        self.track_title(revue.title)
        return revue

    def generate_empty_revue(self) -> RevueDTO:
        return RevueDTO(title="", url="", description="")

    def generate_fake_revue(self) -> RevueDTO:
        """Payload for edits aimed at revues that do not exist"""
        return RevueDTO(title="Fake", url="", description="Fake revue")

    def is_suite_title(self, title: str) -> bool:
        return title in self.created_titles
