"""Rules loader and schema validation tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from src.rules.loader import load_rules
from src.rules.models import Rules


def _minimal_rules() -> dict[str, Any]:
    return {
        "project": {"slug": "test", "rules_version": "1"},
        "site_visibility": {
            "settings_url": "/admin/settings",
            "shop_permalink": "/shop",
        },
        "store_pages": {"paths": ["/shop"]},
        "auth": {"access_token_ttl_minutes": 60, "nonce_ttl_minutes": 30},
    }


def _write(tmp_path: Path, content: str, name: str = "rules.yaml") -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


class TestLoadRules:
    def test_project_rules_file_loads(self, rules: Rules) -> None:
        assert rules.project.slug == "storefront-launch-controls"
        assert rules.site_visibility.settings_nonce_action == "store-settings"
        assert rules.site_visibility.share_key_length == 32
        assert "/checkout" in rules.store_pages.paths

    def test_defaults_applied(self, tmp_path: Path) -> None:
        rules = load_rules(_write(tmp_path, yaml.safe_dump(_minimal_rules())))

        assert rules.site_visibility.saved_event_name == "site_visibility_saved"
        assert rules.banner.preview_query_param == "site-preview"
        assert rules.banner.rest_url_template == "/api/users/{user_id}"
        assert rules.store_pages.prefixes == []
        assert rules.ops.required_env == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(_write(tmp_path, "project: [unclosed"))

    def test_missing_section(self, tmp_path: Path) -> None:
        data = _minimal_rules()
        del data["auth"]
        with pytest.raises(ValueError, match="validation failed"):
            load_rules(_write(tmp_path, yaml.safe_dump(data)))

    def test_share_key_length_bounds(self, tmp_path: Path) -> None:
        data = _minimal_rules()
        data["site_visibility"]["share_key_length"] = 4
        with pytest.raises(ValueError):
            load_rules(_write(tmp_path, yaml.safe_dump(data)))

    def test_yaml_block_in_markdown(self, tmp_path: Path) -> None:
        doc = "# Store rules\n\n```yaml\n" + yaml.safe_dump(_minimal_rules()) + "```\n\nNotes.\n"
        rules = load_rules(_write(tmp_path, doc, "rules.md"))
        assert rules.project.slug == "test"

    def test_empty_file(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="mapping"):
            load_rules(_write(tmp_path, ""))

    def test_store_paths_must_be_absolute(self, tmp_path: Path) -> None:
        data = _minimal_rules()
        data["store_pages"]["paths"] = ["shop"]
        with pytest.raises(ValueError, match="must start with '/'"):
            load_rules(_write(tmp_path, yaml.safe_dump(data)))
