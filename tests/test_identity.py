# tests/test_identity.py
import re

import pytest

from ingres.storage.identity import (
    OFFICIAL,
    PUBLIC,
    context_from_path,
    generate_contextual_user_id,
    generate_user_id,
)

UUID_SHAPE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-8[0-9a-f]{3}-[0-9a-f]{12}$"
)


class TestGenerateUserId:

    def test_known_values(self):
        assert generate_user_id("a") == "00000061-0000-4000-8000-000000610000"
        assert generate_user_id("ab") == "00000c21-0000-4000-8000-00000c210000"

    def test_empty_name(self):
        assert generate_user_id("") == "00000000-0000-4000-8000-000000000000"

    def test_same_name_same_id(self):
        assert generate_user_id("Ramesh Kumar") == generate_user_id("Ramesh Kumar")

    def test_names_are_case_sensitive(self):
        assert generate_user_id("ramesh") != generate_user_id("Ramesh")

    @pytest.mark.parametrize("name", [
        "Ramesh Kumar",
        "Priya Sharma from Ludhiana district",
        "प्रिया",
        "x" * 500,
    ])
    def test_output_is_uuid_shaped(self, name):
        """Long names overflow the 32-bit hash; the shape stays fixed."""
        assert UUID_SHAPE.match(generate_user_id(name))


class TestContextualUserId:

    def test_contexts_give_different_ids(self):
        public_id = generate_contextual_user_id("Ramesh", PUBLIC)
        official_id = generate_contextual_user_id("Ramesh", OFFICIAL)

        assert public_id != official_id

    def test_prefixes_context(self):
        assert generate_contextual_user_id("Ramesh", OFFICIAL) == generate_user_id("official_Ramesh")

    def test_defaults_to_public(self):
        assert generate_contextual_user_id("Ramesh") == generate_user_id("public_Ramesh")

    def test_unknown_context_rejected(self):
        with pytest.raises(ValueError):
            generate_contextual_user_id("Ramesh", "admin")


class TestContextFromPath:

    @pytest.mark.parametrize("path,expected", [
        ("/official-dashboard", OFFICIAL),
        ("/playground", OFFICIAL),
        ("/", PUBLIC),
        ("/chat", PUBLIC),
        (None, PUBLIC),
    ])
    def test_context_from_path(self, path, expected):
        assert context_from_path(path) == expected
