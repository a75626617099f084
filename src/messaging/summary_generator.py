"""
Customer Summary Generator
Writes a short status message for the customer using Google Gemini
"""
import re
import google.generativeai as genai
import config
from tracker.errors import SummaryGenerationError
from tracker.models import Customer


class SummaryGenerator:
    """Generate a natural-language delivery status summary with Gemini"""

    def __init__(self, model_name: str = None, logger=None):
        """Initialize the generator with Gemini API"""
        genai.configure(api_key=config.GOOGLE_API_KEY)
        self.model = genai.GenerativeModel(model_name or config.GEMINI_MODEL)
        self.logger = logger

        self.summary_prompt = """
Eres un asistente de atención al cliente de {company}.
Escribe un mensaje breve y cordial (2 o 3 oraciones) para el cliente
explicando en qué etapa está la entrega de su vehículo.

REGLAS:
- Dirígete al cliente por su nombre
- Usa solo los datos de abajo, no inventes fechas ni estados
- Si una etapa está vacía, "#N/A" o "NO", considérala pendiente
- Texto plano, sin markdown, sin listas, sin saludos de despedida

DATOS DEL CLIENTE:
"""

    def build_prompt(self, customer: Customer) -> str:
        """
        Build the full Gemini prompt for a customer

        Args:
            customer: Customer record

        Returns:
            Prompt text ending with the customer's status fields
        """
        fields = [
            ('Cliente', customer.customer_name),
            ('Asesor', customer.salesperson),
            ('Fecha de venta', customer.sale_date),
            ('Facturado', customer.billed),
            ('Registro', customer.registration),
            ('Trámite en registro', customer.registration_procedure),
            ('Fecha de patentamiento', customer.patent_date),
            ('Patentado', customer.patented),
            ('Preentregas', customer.pre_deliveries),
            ('Pre-entrega', customer.pre_delivery),
        ]
        lines = [f"- {label}: {value or 'sin dato'}" for label, value in fields]
        return self.summary_prompt.format(company=config.PORTAL_COMPANY_NAME) + "\n".join(lines)

    def summarize(self, customer: Customer) -> str:
        """
        Generate the summary message for a customer

        Args:
            customer: Customer record

        Returns:
            Plain-text message

        Raises:
            SummaryGenerationError: Gemini failed or returned an empty reply
        """
        try:
            response = self.model.generate_content(self.build_prompt(customer))
            text = (response.text or "").strip()
        except Exception as e:
            raise SummaryGenerationError(f"Gemini summary failed: {str(e)}") from e

        # Clean up response (remove markdown code blocks if present)
        text = re.sub(r'^```\w*\s*', '', text)
        text = re.sub(r'\s*```$', '', text)
        text = text.strip()

        if not text:
            raise SummaryGenerationError("Gemini returned an empty summary")
        return text
