"""
View 서비스

Vault 도메인 객체를 API 응답 모델로 변환.
금액은 최소 단위 정수 문자열, 표시값은 기초 자산 decimals로 환산.
"""

from core.config.loader import AssetConfig
from core.domain.events import Event
from core.ledger.types import Certificate, ImpactAccount, TradingWallet, WithdrawalReceipt
from core.utils.units import format_units
from vault.service import AccountView, VaultSnapshot
from web.models.responses import (
    AccountResponse,
    CertificateResponse,
    EventResponse,
    ImpactAccountResponse,
    TradingWalletResponse,
    VaultSnapshotResponse,
    WithdrawalReceiptResponse,
)


class ViewService:
    """응답 변환 서비스

    Args:
        asset: 기초 자산 정보 (표시 단위 환산용)
    """

    def __init__(self, asset: AssetConfig):
        self.asset = asset

    def display(self, amount: int) -> str:
        """최소 단위 → 토큰 단위 문자열"""
        return str(format_units(amount, self.asset.decimals))

    def snapshot(self, snapshot: VaultSnapshot) -> VaultSnapshotResponse:
        return VaultSnapshotResponse(
            asset_symbol=self.asset.symbol,
            asset_decimals=self.asset.decimals,
            idle_assets=str(snapshot.idle_assets),
            allocated_assets=str(snapshot.allocated_assets),
            total_assets=str(snapshot.total_assets),
            total_assets_display=self.display(snapshot.total_assets),
            total_shares=str(snapshot.total_shares),
            share_price=str(snapshot.share_price),
            paused=snapshot.paused,
            min_deposit=str(snapshot.min_deposit),
            withdrawal_fee_bps=snapshot.withdrawal_fee_bps,
            max_allocation_bps=snapshot.max_allocation_bps,
            max_allocatable=str(snapshot.max_allocatable),
            accumulated_fees=str(snapshot.accumulated_fees),
            total_pool_balance=str(snapshot.total_pool_balance),
            account=self.account(snapshot.account) if snapshot.account else None,
        )

    def account(self, view: AccountView) -> AccountResponse:
        return AccountResponse(
            owner=view.owner,
            shares=str(view.shares),
            total_deposited=str(view.total_deposited),
            current_value=str(view.current_value),
            unrealized_profit=str(view.unrealized_profit),
            total_profit_withdrawn=str(view.total_profit_withdrawn),
            donation_rate_bps=view.donation_rate_bps,
            pool_balance=str(view.pool_balance),
            total_donated=str(view.total_donated),
            certificate_count=view.certificate_count,
        )

    def receipt(self, receipt: WithdrawalReceipt) -> WithdrawalReceiptResponse:
        return WithdrawalReceiptResponse(
            gross_assets=str(receipt.gross_assets),
            profit=str(receipt.profit),
            fee=str(receipt.fee),
            donation=str(receipt.donation),
            net_to_user=str(receipt.net_to_user),
            net_to_user_display=self.display(receipt.net_to_user),
            shares_burned=str(receipt.shares_burned),
            certificate_id=receipt.certificate_id,
        )

    @staticmethod
    def certificate(certificate: Certificate) -> CertificateResponse:
        return CertificateResponse(
            id=certificate.id,
            owner=certificate.owner,
            amount=str(certificate.amount),
            timestamp=certificate.timestamp.isoformat(),
            is_minted=certificate.is_minted,
            token_id=certificate.token_id,
        )

    @staticmethod
    def impact_account(account: ImpactAccount, certificate_count: int) -> ImpactAccountResponse:
        return ImpactAccountResponse(
            owner=account.owner,
            donation_rate_bps=account.donation_rate_bps,
            total_donated=str(account.total_donated),
            pool_balance=str(account.pool_balance),
            certificate_count=certificate_count,
        )

    @staticmethod
    def trading_wallet(wallet: TradingWallet) -> TradingWalletResponse:
        return TradingWalletResponse(
            wallet=wallet.wallet,
            allocated=str(wallet.allocated),
            total_allocated=str(wallet.total_allocated),
            total_returned=str(wallet.total_returned),
            total_profit=str(wallet.total_profit),
        )

    @staticmethod
    def event(event: Event) -> EventResponse:
        return EventResponse(
            seq=event.seq,
            event_id=event.event_id,
            event_type=event.event_type,
            ts=event.ts.isoformat(),
            tx_id=event.tx_id,
            actor=event.actor,
            entity_kind=event.entity_kind,
            entity_id=event.entity_id,
            payload=event.payload,
        )
