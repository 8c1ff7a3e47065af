"""
EmailService邮件发送测试（不访问真实服务商）
"""

import pytest
import resend
from decimal import Decimal

from storefront.models.abandoned_checkout import CartItem
from storefront.services.email_service import EmailService, EmailDeliveryError


@pytest.mark.asyncio
class TestEmailService:

    @pytest.fixture
    def email_service(self):
        return EmailService(
            api_key="re_test_key",
            sender_email="orders@example.com",
            store_name="Test Store",
            public_app_url="https://shop.example.com/"
        )

    @pytest.fixture
    def sent_payloads(self, monkeypatch):
        """拦截Resend SDK调用"""
        payloads = []

        def fake_send(payload):
            payloads.append(payload)
            return {"id": "email_123"}

        monkeypatch.setattr(resend.Emails, "send", fake_send)
        return payloads

    async def test_send_abandoned_cart_email(self, email_service, sent_payloads, sample_cart):
        """挽回邮件包含商品明细和挽回链接"""
        message_id = await email_service.send_abandoned_cart_email("ali@example.com", sample_cart)

        assert message_id == "email_123"
        payload = sent_payloads[0]
        assert payload["to"] == ["ali@example.com"]
        assert payload["from"] == "Test Store <orders@example.com>"
        assert payload["subject"] == "You left something in your cart - Test Store"
        assert "https://shop.example.com/checkout/recover/cart_001" in payload["html"]
        assert "Linen Shirt" in payload["html"]
        assert "Rs. 899.5" in payload["html"]
        assert "Rs. 5899.5" in payload["html"]
        assert "Hi <strong>Ali</strong>" in payload["html"]

    async def test_send_without_api_key(self, sample_cart):
        """未配置密钥时报错"""
        service = EmailService(api_key="")

        with pytest.raises(EmailDeliveryError):
            await service.send_abandoned_cart_email("ali@example.com", sample_cart)

    async def test_send_without_message_id(self, email_service, monkeypatch, sample_cart):
        """服务商未返回消息ID视为失败"""
        monkeypatch.setattr(resend.Emails, "send", lambda payload: {"error": "rate limited"})

        with pytest.raises(EmailDeliveryError):
            await email_service.send_abandoned_cart_email("ali@example.com", sample_cart)

    async def test_greeting_falls_back_without_name(self, email_service, sample_cart):
        sample_cart.name = None

        html = email_service.render_abandoned_cart_html(sample_cart)

        assert "Hi <strong>there</strong>" in html

    async def test_renders_item_without_name(self, email_service, sample_cart):
        """商品缺少名称时仍能生成邮件"""
        sample_cart.cart_items = [CartItem(price=Decimal("1200"), quantity=3)]

        html = email_service.render_abandoned_cart_html(sample_cart)

        assert "x3" in html
        assert "Rs. 1200" in html
