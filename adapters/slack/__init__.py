"""
Slack 어댑터

Vault 연산 결과(OperationResult)를 Slack Webhook으로 전송.
"""

from adapters.slack.notifier import SlackNotifier

__all__ = [
    "SlackNotifier",
]
