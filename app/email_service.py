import html
from typing import Optional
import requests

from app.config import Settings
from app.errors import NotificationError

RESEND_API_URL = "https://api.resend.com/emails"
ACCESS_EMAIL_SUBJECT = "Your CIIReady R01 access link"


def first_name(name: Optional[str]) -> str:
    if not name:
        return ""
    return name.split(" ")[0]


def build_access_link(app_url: str, access_token: str) -> str:
    return app_url + "?token=" + access_token


def build_access_email(access_link: str, name: Optional[str] = None) -> str:
    greeting_name = first_name(name)
    heading = f"You're in, {html.escape(greeting_name)}." if greeting_name else "You're in."

    return "\n".join([
        '<div style="font-family:-apple-system,BlinkMacSystemFont,sans-serif;max-width:560px;margin:0 auto;padding:40px 24px">',
        '<div style="margin-bottom:32px">',
        '<span style="display:inline-block;background:#3b6cf5;color:#fff;font-weight:700;font-size:13px;padding:6px 12px;border-radius:8px">CR</span>',
        '<span style="font-size:18px;font-weight:600;margin-left:8px;color:#0c1421">CIIReady</span>',
        '</div>',
        '<h1 style="font-size:24px;font-weight:600;color:#0c1421;margin:0 0 12px;line-height:1.3">',
        heading,
        '</h1>',
        '<p style="font-size:15px;color:#5e6878;line-height:1.7;margin:0 0 28px">',
        "Your CIIReady R01 access is ready. Bookmark the link below, it's your personal key to the app. No password needed.",
        '</p>',
        f'<a href="{html.escape(access_link)}" style="display:inline-block;background:#3b6cf5;color:#ffffff;font-size:15px;font-weight:600;text-decoration:none;padding:14px 32px;border-radius:10px;margin-bottom:28px">',
        'Open CIIReady R01 &rarr;',
        '</a>',
        '<p style="font-size:13px;color:#8d95a3;line-height:1.6;margin-top:28px">',
        'This link is unique to you. Save it somewhere safe, you can use it on any device.<br>If you have any questions, reply to this email.',
        '</p>',
        '<div style="margin-top:40px;padding-top:20px;border-top:1px solid #e4e7ec">',
        '<p style="font-size:12px;color:#8d95a3;margin:0">',
        '&copy; 2026 CIIReady &middot; Not affiliated with the Chartered Insurance Institute',
        '</p></div></div>',
    ])


def send_access_email(settings: Settings, to: str, name: Optional[str], access_link: str) -> None:
    payload = {
        "from": settings.from_email,
        "to": [to],
        "subject": ACCESS_EMAIL_SUBJECT,
        "html": build_access_email(access_link, name),
    }
    headers = {
        "Authorization": f"Bearer {settings.resend_api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(RESEND_API_URL, json=payload, headers=headers)
    except requests.RequestException as e:
        raise NotificationError(f"Error calling Resend: {e}") from e

    if not response.ok:
        raise NotificationError(f"{response.status_code} {response.text}")
