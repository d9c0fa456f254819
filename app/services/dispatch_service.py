"""
app/services/dispatch_service.py

Purpose: Lead message dispatch pipeline

- Checks provider configuration before touching the network
- Validates and normalizes the lead's input
- Renders the message template and builds WhatsApp addresses
- Sends exactly one message and maps the outcome to a DispatchResult
"""

from app.core.config import ProviderConfig
from app.core.exceptions import ConfigError, ProviderError, ValidationError
from app.core.logging import get_logger, mask_phone
from app.schemas.dispatch import DispatchRequest, DispatchResult, FailureCategory
from app.services.twilio_service import MessagingProvider
from utils.validation_utils import validate_presence, normalize_phone
from utils.whatsapp_utils import to_whatsapp_address, render_name_tokens

logger = get_logger(__name__)

REQUIRED_FIELDS_MESSAGE = "Full name, WhatsApp number, and message template are required."
UNEXPECTED_ERROR_MESSAGE = "Unexpected server error"


class DispatchService:
    """
    Sends one personalized WhatsApp message per request.

    The provider config is injected once and never re-read, so a single
    instance can serve concurrent requests.
    """

    def __init__(self, config: ProviderConfig, provider: MessagingProvider):
        self.config = config
        self.provider = provider

    def check_config(self) -> None:
        """
        Raises:
            ConfigError: naming every missing setting, not just the first
        """
        missing = self.config.missing_fields()
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}.",
                details={"missing": missing}
            )

    @staticmethod
    def render_message(template: str, full_name: str) -> str:
        return render_name_tokens(template, full_name)

    async def dispatch(self, request: DispatchRequest) -> DispatchResult:
        """
        Runs the pipeline: config, presence, phone, render, send.
        Each stage either feeds the next or ends the call with a failure.
        """
        try:
            self.check_config()
        except ConfigError as e:
            logger.error(f"Dispatch blocked by configuration: {e.message}")
            return DispatchResult.failure(FailureCategory.CONFIG_ERROR, e.message)

        try:
            full_name, phone_number, template = validate_presence(
                request.full_name,
                request.phone_number,
                request.message_template
            )
        except ValidationError:
            logger.info("Dispatch rejected: required fields missing")
            return DispatchResult.failure(FailureCategory.VALIDATION_ERROR, REQUIRED_FIELDS_MESSAGE)

        try:
            phone = normalize_phone(phone_number)
        except ValidationError as e:
            logger.info("Dispatch rejected: invalid phone format")
            return DispatchResult.failure(FailureCategory.VALIDATION_ERROR, e.message)

        body = self.render_message(template, full_name)
        to = to_whatsapp_address(phone)
        from_ = to_whatsapp_address(self.config.whatsapp_from.strip())

        context = {"phone": mask_phone(phone), "stage": "send"}
        try:
            sent = await self.provider.send_message(from_=from_, to=to, body=body)
        except ProviderError as e:
            logger.warning(f"Provider rejected message: {e.message}", extra={**context, "category": "PROVIDER_ERROR"})
            return DispatchResult.failure(FailureCategory.PROVIDER_ERROR, e.message)
        except Exception as e:
            # Details stay in the log, never in the result
            logger.error(f"Unexpected dispatch error: {e}", extra={**context, "category": "UNKNOWN_ERROR"}, exc_info=True)
            return DispatchResult.failure(FailureCategory.UNKNOWN_ERROR, UNEXPECTED_ERROR_MESSAGE)

        logger.info(f"Message dispatched (sid={sent.sid if sent else None})", extra=context)

        return DispatchResult.success()
