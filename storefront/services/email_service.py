"""
事务邮件发送服务
通过 Resend 发送，SDK为同步调用，放到线程中执行避免阻塞事件循环
"""

import asyncio
import logging
from html import escape
from typing import Any, Dict, Optional

import resend

from storefront.core.config import settings
from storefront.models.abandoned_checkout import AbandonedCheckout
from storefront.models.common import format_amount

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """邮件发送失败"""


class EmailService:
    """事务邮件服务"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        sender_email: Optional[str] = None,
        store_name: Optional[str] = None,
        public_app_url: Optional[str] = None
    ):
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.sender_email = sender_email or settings.email_from
        self.store_name = store_name or settings.store_name
        self.public_app_url = (public_app_url or settings.public_app_url).rstrip("/")

    async def send_email(self, to: str, subject: str, html: str, text: Optional[str] = None) -> str:
        """发送邮件，返回服务商消息ID"""
        if not self.api_key:
            raise EmailDeliveryError("Resend API key is not configured.")

        payload: Dict[str, Any] = {
            "from": f"{self.store_name} <{self.sender_email}>",
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if text:
            payload["text"] = text

        response = await asyncio.to_thread(self._send, payload)

        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        if not message_id:
            raise EmailDeliveryError(f"Unexpected response from email provider: {response}")

        logger.info(f"邮件发送成功 to={to} id={message_id}")
        return message_id

    def _send(self, payload: Dict[str, Any]):
        resend.api_key = self.api_key
        return resend.Emails.send(payload)

    def recovery_link(self, cart_id: str) -> str:
        return f"{self.public_app_url}/checkout/recover/{cart_id}"

    async def send_abandoned_cart_email(self, to: str, cart: AbandonedCheckout) -> str:
        """发送购物车挽回邮件"""
        subject = f"You left something in your cart - {self.store_name}"
        return await self.send_email(
            to=to,
            subject=subject,
            html=self.render_abandoned_cart_html(cart),
            text=f"Complete your order here: {self.recovery_link(cart.id)}"
        )

    def render_abandoned_cart_html(self, cart: AbandonedCheckout) -> str:
        items_html = "".join(
            f"""
            <tr style="border-bottom: 1px solid #eee;">
                <td style="padding: 10px; color: #333;">{escape(item.name or "")} <span style="color:#999; font-size:12px;">x{item.quantity}</span></td>
                <td style="padding: 10px; text-align: right; color: #333;">Rs. {format_amount(item.price)}</td>
            </tr>"""
            for item in cart.cart_items
        )
        greeting = escape(cart.name) if cart.name else "there"

        return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; border: 1px solid #eee; border-radius: 10px; overflow: hidden;">
        <div style="background-color: #1c524f; color: white; padding: 20px; text-align: center;">
            <h1 style="margin: 0;">Your cart is waiting</h1>
        </div>
        <div style="padding: 30px;">
            <p style="color: #666; font-size: 16px;">Hi <strong>{greeting}</strong>,</p>
            <p style="color: #666; line-height: 1.5;">You left a few items behind. They are still saved for you.</p>
            <table style="width: 100%; border-collapse: collapse; margin-top: 10px;">
                {items_html}
                <tr>
                    <td style="padding: 10px; font-weight: bold; border-top: 2px solid #eee;">Total Amount</td>
                    <td style="padding: 10px; text-align: right; font-weight: bold; border-top: 2px solid #eee; color: #1c524f;">Rs. {format_amount(cart.total_amount)}</td>
                </tr>
            </table>
            <div style="text-align: center; margin-top: 30px;">
                <a href="{self.recovery_link(cart.id)}" style="display: inline-block; padding: 12px 24px; background-color: #1c524f; color: white; text-decoration: none; border-radius: 5px; font-weight: bold; font-size: 16px;">Complete Your Order</a>
            </div>
        </div>
        <div style="background-color: #f5f5f5; padding: 15px; text-align: center; color: #aaa; font-size: 12px;">
            <p>Thank you for shopping with {escape(self.store_name)}!</p>
        </div>
    </div>
    """


# 全局邮件服务实例
email_service = EmailService()
