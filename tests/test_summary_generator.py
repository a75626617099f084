"""
Summary generator tests
Gemini is mocked; no API key or network needed.
"""
import os
import sys
import unittest
from unittest.mock import MagicMock, patch

SRC_DIR = os.path.join(os.path.dirname(__file__), '..', 'src')
sys.path.insert(0, os.path.abspath(SRC_DIR))

from tracker.errors import SummaryGenerationError
from tracker.models import Customer


CUSTOMER = Customer(
    dni='30111222',
    customer_name='Juan Pérez',
    salesperson='Laura Gómez',
    sale_date='01/03/2025',
    billed='Facturada',
    registration_procedure='En tramite',
    pre_delivery='',
)


class TestSummaryGenerator(unittest.TestCase):

    def setUp(self):
        patcher = patch('messaging.summary_generator.genai')
        self.mock_genai = patcher.start()
        self.addCleanup(patcher.stop)
        self.model = self.mock_genai.GenerativeModel.return_value

        from messaging.summary_generator import SummaryGenerator
        self.generator = SummaryGenerator(model_name='gemini-test')

    def test_configures_model(self):
        self.mock_genai.GenerativeModel.assert_called_once_with('gemini-test')
        self.mock_genai.configure.assert_called_once()

    def test_prompt_contains_customer_fields(self):
        prompt = self.generator.build_prompt(CUSTOMER)
        self.assertIn('Juan Pérez', prompt)
        self.assertIn('Facturado: Facturada', prompt)
        self.assertIn('Trámite en registro: En tramite', prompt)
        self.assertIn('Pre-entrega: sin dato', prompt)

    def test_summarize_returns_text(self):
        self.model.generate_content.return_value = MagicMock(text='  Hola Juan, su unidad ya fue facturada.  ')
        self.assertEqual(self.generator.summarize(CUSTOMER), 'Hola Juan, su unidad ya fue facturada.')
        prompt = self.model.generate_content.call_args[0][0]
        self.assertIn('Juan Pérez', prompt)

    def test_strips_markdown_fences(self):
        self.model.generate_content.return_value = MagicMock(text='```text\nHola Juan.\n```')
        self.assertEqual(self.generator.summarize(CUSTOMER), 'Hola Juan.')

    def test_empty_reply_raises(self):
        self.model.generate_content.return_value = MagicMock(text='   ')
        with self.assertRaises(SummaryGenerationError):
            self.generator.summarize(CUSTOMER)

    def test_api_error_wrapped(self):
        self.model.generate_content.side_effect = RuntimeError('503 unavailable')
        with self.assertRaises(SummaryGenerationError) as ctx:
            self.generator.summarize(CUSTOMER)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)


if __name__ == "__main__":
    unittest.main()
