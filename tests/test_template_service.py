"""
Scancodes — Template Service Unit Tests
========================================

What:  Tests for TemplateService extraction, coercion, caching and errors.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

import scancodes.services.template_service as template_module
from scancodes.exceptions import BlueprintError
from scancodes.schemas.responses import KeyValue
from scancodes.services.template_service import TemplateService


class TestTemplateExtraction:

    def test_pairs_in_blueprint_order(self, blueprint_text):
        service = TemplateService(blueprint_text)
        assert service.get_templates() == [
            KeyValue(key="template0001style1", value="Plain"),
            KeyValue(key="template0002style1", value="Navy"),
            KeyValue(key="template0003style1", value="Rugged"),
        ]

    def test_non_string_values_coerced(self):
        blueprint = json.dumps({"templates": [{"identifier": 42, "name": 3.5}]})
        assert TemplateService(blueprint).get_templates() == [KeyValue(key="42", value="3.5")]

    def test_extra_entry_fields_ignored(self):
        blueprint = json.dumps(
            {"templates": [{"identifier": "a", "name": "A", "dark": "#fff", "scale": 3}]}
        )
        assert TemplateService(blueprint).get_templates() == [KeyValue(key="a", value="A")]

    def test_empty_template_array(self):
        assert TemplateService(json.dumps({"templates": []})).get_templates() == []

    def test_missing_templates_key(self):
        with pytest.raises(BlueprintError, match="no 'templates' array"):
            TemplateService(json.dumps({"version": 1})).get_templates()

    def test_templates_not_a_list(self):
        with pytest.raises(BlueprintError, match="no 'templates' array"):
            TemplateService(json.dumps({"templates": {"identifier": "a"}})).get_templates()

    def test_entry_not_an_object(self):
        with pytest.raises(BlueprintError, match="entry 1 is not an object"):
            TemplateService(
                json.dumps({"templates": [{"identifier": "a", "name": "A"}, "b"]})
            ).get_templates()

    def test_entry_missing_name(self):
        with pytest.raises(BlueprintError, match="missing name"):
            TemplateService(json.dumps({"templates": [{"identifier": "a"}]})).get_templates()

    def test_invalid_json(self):
        with pytest.raises(BlueprintError, match="not valid JSON"):
            TemplateService("{oops").get_templates()


class TestTemplateCache:

    def test_second_call_equal(self, blueprint_text):
        service = TemplateService(blueprint_text)
        assert service.get_templates() == service.get_templates()

    def test_blueprint_parsed_once(self, blueprint_text):
        service = TemplateService(blueprint_text)
        with patch.object(template_module.json, "loads", wraps=json.loads) as spy:
            service.get_templates()
            service.get_templates()
            service.get_templates()
        assert spy.call_count == 1

    def test_caller_mutation_does_not_leak_into_cache(self, blueprint_text):
        service = TemplateService(blueprint_text)
        first = service.get_templates()
        first.clear()
        assert len(service.get_templates()) == 3

    def test_concurrent_first_calls_agree(self, blueprint_text):
        service = TemplateService(blueprint_text)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: service.get_templates(), range(32)))
        assert all(result == results[0] for result in results)
        assert len(results[0]) == 3

    def test_failure_is_not_cached(self):
        service = TemplateService(json.dumps({"version": 1}))
        for _ in range(2):
            with pytest.raises(BlueprintError):
                service.get_templates()
