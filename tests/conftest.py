"""Shared fixtures: an in-memory fake translation service and workbook builders."""

import json

import openpyxl
import pytest

from sheet_localizer.config import Settings
from sheet_localizer.errors import TranslationServiceError
from sheet_localizer.providers import BaseProvider


def prompt_texts(prompt):
    """Return the masked texts of a prompt, in order, without their numbers."""
    body = prompt.split("Texts to translate:\n", 1)[1]
    return [line.partition(". ")[2] for line in body.splitlines()]


class FakeProvider(BaseProvider):
    """Answers every request locally.

    Args:
        translate: Function applied to each masked text (identity by default)
        fail_on: 1-based call numbers that raise TranslationServiceError
        replies: Fixed raw replies returned for consecutive calls instead of translating
        json_replies: Advertise and answer with the JSON format
    """

    def __init__(self, translate=None, fail_on=(), replies=None, json_replies=False):
        super().__init__(api_key="test-key", model="fake-model", timeout=1.0)
        self.translate = translate or (lambda text: text)
        self.fail_on = set(fail_on)
        self.replies = list(replies) if replies is not None else None
        self.supports_json = json_replies
        self.calls = []
        self.pings = 0

    async def complete(self, system, prompt, json_mode=False):
        self.calls.append({"system": system, "prompt": prompt, "json_mode": json_mode})
        if len(self.calls) in self.fail_on:
            raise TranslationServiceError(f"call {len(self.calls)} failed")

        if self.replies is not None:
            return self.replies.pop(0)

        translated = [self.translate(text) for text in prompt_texts(prompt)]
        if json_mode:
            return json.dumps({"translations": translated})
        return "\n".join(f"{index}. {text}" for index, text in enumerate(translated, 1))

    async def ping(self):
        self.pings += 1


@pytest.fixture
def worksheet():
    """An empty first worksheet."""
    return openpyxl.Workbook().active


@pytest.fixture
def settings(tmp_path):
    return Settings(api_key="test-key", output_dir=str(tmp_path / "output"))


def make_sheet(rows):
    """Build a worksheet from a list of rows (the first row is the header)."""
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    return sheet
