"""
Send a test WhatsApp message

Run this script to verify Twilio is configured correctly
and that the dispatch pipeline can reach a real phone.

Usage: python scripts/send_test_message.py
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from app.core.config import ProviderConfig, Settings
from app.schemas.dispatch import DispatchRequest
from app.services.dispatch_service import DispatchService
from app.services.twilio_service import TwilioService


def check_config(config: ProviderConfig) -> bool:
    """Print which Twilio settings are present"""
    print("=" * 60)
    print("  Twilio Configuration Test")
    print("=" * 60 + "\n")

    print(f"Account SID: {config.account_sid[:10]}..." if config.account_sid else "Account SID: ❌ Not set")
    print(f"Auth Token: {'✅ Set' if config.auth_token else '❌ Not set'}")
    print(f"WhatsApp From: {config.whatsapp_from or '❌ Not set'}")

    missing = config.missing_fields()
    if missing:
        print(f"\n⚠️  Please set {', '.join(missing)} in your .env file")
        return False

    print("\nConfiguration valid: ✅ Yes\n")
    return True


async def send(service: DispatchService):
    """Prompt for a lead and dispatch one message"""
    print("=" * 60)
    print("  Test Message Sending")
    print("=" * 60 + "\n")

    request = DispatchRequest(
        full_name=input("Lead full name: "),
        phone_number=input("WhatsApp number (with country code, e.g., +15551234567): "),
        message_template=input("Message template [Hi {{name}}, this is a test]: ") or "Hi {{name}}, this is a test",
    )

    print("\n📤 Sending test message...")
    result = await service.dispatch(request)

    if result.ok:
        print("\n✅ Message sent successfully!")
        print("📱 Check WhatsApp!")
    else:
        print(f"\n❌ Failed to send message ({result.category.value}, HTTP {result.status_code})")
        print(f"Error: {result.reason}")


async def main():
    print("\n🧪 Lead Messenger Twilio Test\n")

    config = ProviderConfig.from_settings(Settings())
    if not check_config(config):
        print("\n❌ Configuration test failed. Please fix .env file and try again.")
        return

    service = DispatchService(config=config, provider=TwilioService(config))

    if input("Do you want to send a test message? (y/n): ").lower() == "y":
        await send(service)
    else:
        print("\n✅ Configuration test passed!")


if __name__ == "__main__":
    asyncio.run(main())
