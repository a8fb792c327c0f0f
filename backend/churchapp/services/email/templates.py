"""Email bodies for follow-up and rota reminders. Each returns subject, html and plain text."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from html import escape

from churchapp.core.phone import whatsapp_link

CHURCH_NAME = "RCCG Power of Jehovah, Essex"
FOOTER = "This is an automated reminder from the RCCG POJ Essex Church Management System."


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str
    text: str


def _plural_days(n: int) -> str:
    return f"{n} day{'s' if n != 1 else ''}"


def _page(title: str, header: str, header_colour: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
  </head>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background: {header_colour}; padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
      <h1 style="color: white; margin: 0;">{escape(header)}</h1>
    </div>
    <div style="background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px;">
{body}
      <p style="color: #666; font-size: 14px; margin-top: 30px;">{FOOTER}</p>
    </div>
  </body>
</html>
"""


def followup_overdue_email(
    *,
    staff_name: str,
    newcomer_name: str,
    newcomer_email: str | None,
    newcomer_phone: str | None,
    days_overdue: int,
    dashboard_url: str,
) -> EmailContent:
    subject = f"Overdue Follow-up: {newcomer_name} ({_plural_days(days_overdue)} overdue)"
    wa = whatsapp_link(newcomer_phone)

    details = [f'<p style="margin: 0 0 10px 0;"><strong>Name:</strong> {escape(newcomer_name)}</p>']
    lines = [f"Name: {newcomer_name}"]
    if newcomer_email:
        details.append(f'<p style="margin: 0 0 10px 0;"><strong>Email:</strong> {escape(newcomer_email)}</p>')
        lines.append(f"Email: {newcomer_email}")
    if newcomer_phone:
        phone_html = escape(newcomer_phone)
        if wa:
            phone_html += f' (<a href="{wa}">WhatsApp</a>)'
        details.append(f'<p style="margin: 0 0 10px 0;"><strong>Phone:</strong> {phone_html}</p>')
        lines.append(f"Phone: {newcomer_phone}" + (f" (WhatsApp: {wa})" if wa else ""))
    details.append(f'<p style="margin: 0; color: #ef4444;"><strong>Days Overdue:</strong> {days_overdue}</p>')
    lines.append(f"Days Overdue: {days_overdue}")

    details_html = "".join(details)
    body = f"""      <h2 style="color: #dc2626; margin-top: 0;">Action Required</h2>
      <p>Hello {escape(staff_name)},</p>
      <p>This is a reminder that you have an overdue follow-up assignment:</p>
      <div style="background: white; padding: 20px; border-radius: 5px; margin: 20px 0; border-left: 4px solid #ef4444;">
        {details_html}
      </div>
      <p style="color: #dc2626; font-weight: bold;">Please contact them as soon as possible.</p>
      <div style="text-align: center; margin: 30px 0;">
        <a href="{escape(dashboard_url)}" style="background: #ef4444; color: white; padding: 12px 30px; text-decoration: none; border-radius: 5px; display: inline-block;">Update Status</a>
      </div>"""
    html = _page(subject, "Overdue Follow-up", "#dc2626", body)

    text = "\n".join(
        [
            "Overdue Follow-up - Action Required",
            "",
            f"Hello {staff_name},",
            "",
            "This is a reminder that you have an overdue follow-up assignment:",
            "",
            *lines,
            "",
            "Please contact them as soon as possible.",
            "",
            f"Update Status: {dashboard_url}",
            "",
            FOOTER,
        ]
    )
    return EmailContent(subject=subject, html=html, text=text)


_ROTA_SUBJECTS = {
    "14-day": "Reminder: Service Assignment in 14 Days",
    "2-day": "Reminder: Service Assignment in 2 Days",
}


def _rota_intro(reminder_type: str, duty_name: str) -> str:
    if reminder_type == "14-day":
        return f"This is a reminder that you are scheduled to serve as {duty_name} in 14 days."
    if reminder_type == "2-day":
        return f"This is a reminder that you are scheduled to serve as {duty_name} in 2 days."
    return f"This is a reminder that you are scheduled to serve as {duty_name}."


def format_service_date(d: date) -> str:
    """e.g. 'Sunday, January 7, 2024'."""
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"


def rota_reminder_email(
    *,
    reminder_type: str,
    member_name: str,
    service_name: str,
    service_date: date,
    service_time: str | None,
    duty_name: str,
) -> EmailContent:
    subject = _ROTA_SUBJECTS.get(reminder_type, "Service Assignment Reminder")
    intro = _rota_intro(reminder_type, duty_name)
    when = format_service_date(service_date) + (f" at {service_time}" if service_time else "")

    text = "\n".join(
        [
            f"Hello {member_name},",
            "",
            intro,
            "",
            "Service Details:",
            f"- Service: {service_name}",
            f"- Date: {when}",
            f"- Duty: {duty_name}",
            "",
            "Please confirm your availability. If you cannot make it, please contact the admin as soon as possible.",
            "",
            "Thank you for your service!",
        ]
    )
    body = f"""      <p>Hello {escape(member_name)},</p>
      <p>{escape(intro)}</p>
      <div style="background: white; padding: 20px; border-radius: 5px; margin: 20px 0; border-left: 4px solid #667eea;">
        <p style="margin: 0 0 10px 0;"><strong>Service:</strong> {escape(service_name)}</p>
        <p style="margin: 0 0 10px 0;"><strong>Date:</strong> {escape(when)}</p>
        <p style="margin: 0;"><strong>Duty:</strong> {escape(duty_name)}</p>
      </div>
      <p>Please confirm your availability. If you cannot make it, please contact the admin as soon as possible.</p>
      <p>Thank you for your service!</p>"""
    html = _page(subject, CHURCH_NAME, "#667eea", body)
    return EmailContent(subject=subject, html=html, text=text)
