"""HTML bodies and subject lines for the two e-mails the service sends."""

from html import escape
from typing import Any, Dict, Mapping, Tuple

from quiet_hours.core.constants import DEFAULT_GREETING_NAME, EmailKind


WELCOME_SUBJECT = "🎉 Welcome to Quiet Hours Scheduler!"

_CONTAINER_STYLE = (
    "font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_FOOTER_STYLE = (
    "text-align: center; margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;"
)


def reminder_subject(block_title: str) -> str:
    return f'🔔 Reminder: "{block_title}" starts in 10 minutes'


def render_reminder(fields: Mapping[str, Any]) -> str:
    title = escape(str(fields["block_title"]))
    date = escape(str(fields["date"]))
    start_time = escape(str(fields["start_time"]))
    end_time = escape(str(fields["end_time"]))
    description = fields.get("block_description")
    description_html = (
        f'<p style="color: #4b5563; margin-bottom: 15px;">{escape(str(description))}</p>'
        if description
        else ""
    )

    return f"""
      <div style="{_CONTAINER_STYLE}">
        <div style="text-align: center; margin-bottom: 30px;">
          <h1 style="color: #2563eb; margin-bottom: 10px;">🔔 Quiet Hours Reminder</h1>
          <p style="color: #6b7280; font-size: 16px;">Your focused study session starts in 10 minutes!</p>
        </div>

        <div style="background-color: #f8fafc; border-radius: 8px; padding: 20px; margin-bottom: 20px;">
          <h2 style="color: #1f2937; margin-top: 0; margin-bottom: 15px;">{title}</h2>
          {description_html}
          <div style="margin-bottom: 15px;">
            <strong style="color: #374151;">📅 Date:</strong>
            <span style="color: #6b7280; margin-left: 8px;">{date}</span>
          </div>
          <div>
            <strong style="color: #374151;">⏰ Time:</strong>
            <span style="color: #6b7280; margin-left: 8px;">{start_time} - {end_time}</span>
          </div>
        </div>

        <div style="background-color: #dbeafe; border-left: 4px solid #2563eb; padding: 15px; margin-bottom: 20px;">
          <p style="margin: 0; color: #1e40af;">
            <strong>💡 Tip:</strong> Take a moment to prepare your study materials and find a quiet space.
            Turn off notifications and get ready to focus!
          </p>
        </div>

        <div style="{_FOOTER_STYLE}">
          <p style="color: #9ca3af; font-size: 14px; margin: 0;">
            This reminder was sent from your Quiet Hours Scheduler.<br>
            Stay focused and make the most of your study time! 🎯
          </p>
        </div>
      </div>
    """


def render_welcome(fields: Mapping[str, Any], dashboard_url: str) -> str:
    name = escape(str(fields.get("user_name") or DEFAULT_GREETING_NAME))
    link = escape(dashboard_url, quote=True)

    return f"""
      <div style="{_CONTAINER_STYLE}">
        <div style="text-align: center; margin-bottom: 30px;">
          <h1 style="color: #2563eb; margin-bottom: 10px;">🎉 Welcome to Quiet Hours Scheduler!</h1>
          <p style="color: #6b7280; font-size: 18px;">Hello {name}, you're all set to boost your productivity!</p>
        </div>

        <div style="background-color: #f8fafc; border-radius: 8px; padding: 20px; margin-bottom: 20px;">
          <h2 style="color: #1f2937; margin-top: 0;">Getting Started</h2>
          <ul style="color: #4b5563; line-height: 1.6;">
            <li><strong>Create your first quiet block:</strong> Schedule focused study sessions</li>
            <li><strong>Get reminders:</strong> Receive email notifications 10 minutes before each session</li>
            <li><strong>Stay organized:</strong> Manage all your study blocks from one dashboard</li>
            <li><strong>Build habits:</strong> Set up recurring sessions for consistent learning</li>
          </ul>
        </div>

        <div style="text-align: center; margin: 30px 0;">
          <a href="{link}"
             style="background-color: #2563eb; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; font-weight: 600;">
            Go to Dashboard
          </a>
        </div>

        <div style="background-color: #ecfdf5; border-left: 4px solid #10b981; padding: 15px; margin-bottom: 20px;">
          <p style="margin: 0; color: #047857;">
            <strong>💡 Pro Tip:</strong> Start with short 25-30 minute sessions and gradually increase the duration
            as you build your focus habits!
          </p>
        </div>

        <div style="{_FOOTER_STYLE}">
          <p style="color: #9ca3af; font-size: 14px; margin: 0;">
            Happy studying! 📚<br>
            The Quiet Hours Scheduler Team
          </p>
        </div>
      </div>
    """


def render_email(
    kind: EmailKind, fields: Dict[str, Any], dashboard_url: str
) -> Tuple[str, str]:
    """Return ``(subject, html_body)`` for a template kind."""
    if kind == EmailKind.REMINDER:
        return reminder_subject(str(fields["block_title"])), render_reminder(fields)
    if kind == EmailKind.WELCOME:
        return WELCOME_SUBJECT, render_welcome(fields, dashboard_url)
    raise ValueError(f"Unsupported email kind: {kind}")
