"""
Tests for the FastAPI portal and JSON routes.
Google Sheets and Gemini are replaced through dependency overrides.
"""
import os
import sys
import unittest
from pathlib import Path

# Ensure src/ is on path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

import config
from tracker.errors import SummaryGenerationError
from tracker.models import Customer


class FakeSource:
    def __init__(self, customers):
        self.customers = customers
        self.calls = 0

    def find_by_dni(self, dni):
        self.calls += 1
        return self.customers.get(dni)


class FakeGenerator:
    def __init__(self, error=None):
        self.error = error

    def summarize(self, customer):
        if self.error:
            raise self.error
        return f"Hola {customer.customer_name}, su unidad ya fue facturada."


JUAN = Customer(
    dni='30111222',
    customer_name='Juan Pérez',
    salesperson='Laura Gómez',
    billed='OK',
    registration_procedure='En tramite',
    pre_delivery='',
)


class PortalTestCase(unittest.TestCase):

    generator_error = None

    def setUp(self):
        from api.main import create_app
        from api.dependencies import get_customer_source, get_summary_generator, get_portal_logger
        from fastapi.testclient import TestClient

        self.source = FakeSource({'30111222': JUAN})
        self.generator = FakeGenerator(error=self.generator_error)

        self.app = create_app()
        self.app.dependency_overrides[get_customer_source] = lambda: self.source
        self.app.dependency_overrides[get_summary_generator] = lambda: self.generator
        self.app.dependency_overrides[get_portal_logger] = lambda: None
        self.client = TestClient(self.app)


class TestPortalPage(PortalTestCase):

    def test_page_renders_empty_state(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("text/html", resp.headers["content-type"])
        self.assertIn(config.PORTAL_TITLE, resp.text)
        self.assertIn("empty-state", resp.text)
        self.assertEqual(self.source.calls, 0)

    def test_page_with_dni_runs_search(self):
        resp = self.client.get("/", params={"dni": "30111222"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn("Hola Juan Pérez", resp.text)
        self.assertIn("Laura Gómez", resp.text)

    def test_page_blank_dni_validation(self):
        resp = self.client.get("/", params={"dni": "  "})
        self.assertIn(config.MSG_EMPTY_DNI, resp.text)
        self.assertEqual(self.source.calls, 0)


class TestSearchFragment(PortalTestCase):

    def test_not_found(self):
        resp = self.client.get("/search", params={"dni": "99999999"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn("DNI no encontrado", resp.text)
        self.assertNotIn("Estado del Proceso", resp.text)
        self.assertNotIn("class=\"summary\"", resp.text)

    def test_found(self):
        resp = self.client.get("/search", params={"dni": "30111222", "request_id": 4})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["x-request-id"], "4")
        self.assertIn("Estado del Proceso", resp.text)
        self.assertEqual(resp.text.count('class="step"'), 3)
        self.assertIn("Juan Pérez", resp.text)

    def test_blank(self):
        resp = self.client.get("/search", params={"dni": ""})
        self.assertIn(config.MSG_EMPTY_DNI, resp.text)
        self.assertEqual(self.source.calls, 0)


class TestSummaryFailure(PortalTestCase):

    generator_error = SummaryGenerationError("Gemini down")

    def test_fragment_shows_generic_error_only(self):
        resp = self.client.get("/search", params={"dni": "30111222"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn(config.MSG_SEARCH_FAILED, resp.text)
        self.assertNotIn("Juan Pérez", resp.text)
        self.assertNotIn("Estado del Proceso", resp.text)

    def test_json_reports_error_phase(self):
        resp = self.client.post("/api/search", json={"dni": "30111222"})
        data = resp.json()
        self.assertEqual(data["phase"], "error")
        self.assertEqual(data["error"], config.MSG_SEARCH_FAILED)
        self.assertIsNone(data["customer"])


class TestJsonSearch(PortalTestCase):

    def test_found(self):
        resp = self.client.post("/api/search", json={"dni": "30111222"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["phase"], "result")
        self.assertEqual(data["customer"]["customer_name"], "Juan Pérez")
        self.assertEqual(
            [s["status"] for s in data["tracker"]["steps"]],
            ["completed", "in-progress", "pending"],
        )
        self.assertEqual(data["overall_status"], "pending")
        self.assertIn("Hola Juan Pérez", data["summary"])

    def test_not_found(self):
        data = self.client.post("/api/search", json={"dni": "1"}).json()
        self.assertEqual(data["phase"], "error")
        self.assertEqual(data["error"], config.MSG_DNI_NOT_FOUND)

    def test_missing_body_field_is_blank(self):
        data = self.client.post("/api/search", json={}).json()
        self.assertEqual(data["error"], config.MSG_EMPTY_DNI)
        self.assertEqual(self.source.calls, 0)


class TestClassifyEndpoint(PortalTestCase):

    def test_classify(self):
        resp = self.client.post("/api/status/classify", json={"texts": ["OK", "en tramite", "#N/A", None]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            [item["status"] for item in resp.json()],
            ["completed", "in-progress", "pending", "pending"],
        )


class TestHealth(PortalTestCase):

    def test_health_no_external_calls(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertIn(data["status"], ("healthy", "degraded"))
        self.assertEqual(data["components"]["sheets"], "not_connected")
        self.assertEqual(self.source.calls, 0)

    def test_openapi_json(self):
        resp = self.client.get("/openapi.json")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("/api/search", resp.json()["paths"])


if __name__ == "__main__":
    unittest.main()
