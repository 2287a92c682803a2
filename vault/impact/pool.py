"""
Impact Pool & Certificate Issuer

인출 수익의 일부(기부금)를 보관하고 영향 증명 인증서를 발행.

- 인증서는 기부 1건당 1개 생성 (Unminted)
- 소유자가 mint_certificate()를 호출하면 Minted(token_id)로 한 번만 전이
- 기부자는 본인이 기부한 잔액(pool_balance) 한도 내에서 인출 가능
"""

import logging

from adapters.interfaces import IAssetTransfer
from core.constants import Defaults
from core.domain.errors import AlreadyDoneError, StateError, ValidationError
from core.domain.events import EventTypes
from core.ledger.store import LedgerStore
from core.ledger.types import Certificate, ImpactAccount
from core.types import EntityKind, Operation
from vault.access import (
    normalize_address,
    require_amount,
    require_bps,
    require_not_paused,
)
from vault.executor import TxContext, VaultExecutor

logger = logging.getLogger(__name__)


class ImpactPool:
    """임팩트 풀

    Args:
        executor: 트랜잭션 경계
        assets: 기초 자산 전송 (donate 입금, withdraw_from_pool 출금)
        default_donation_bps: 기부율을 설정하지 않은 계정의 기본 기부율
    """

    def __init__(
        self,
        executor: VaultExecutor,
        assets: IAssetTransfer,
        default_donation_bps: int = Defaults.DEFAULT_DONATION_BPS,
    ):
        self.executor = executor
        self.assets = assets
        self.default_donation_bps = default_donation_bps

    # -------------------------------------------------------------------------
    # 내부 연산 (다른 컴포넌트의 트랜잭션 안에서 호출)
    # -------------------------------------------------------------------------

    async def resolve_donation_rate(
        self,
        ledger: LedgerStore,
        owner: str,
        donation_bps: int | None,
    ) -> int:
        """적용할 기부율 결정

        호출 시 지정한 값이 우선하고, 없으면 계정에 저장된 기본 기부율을 쓴다.
        """
        if donation_bps is not None:
            return require_bps(donation_bps, "donation_bps")

        account = await ledger.get_impact_account(owner, self.default_donation_bps)
        return account.donation_rate_bps

    async def record_donation(self, tx: TxContext, owner: str, amount: int) -> Certificate:
        """기부금 적립 + 인증서 생성

        자산 이동은 호출자가 처리한다 (Vault 내부 보관분 이동만 기록).
        """
        account = await tx.ledger.get_impact_account(owner, self.default_donation_bps)
        pool = await tx.ledger.get_impact_pool()

        await tx.ledger.save_impact_account(
            ImpactAccount(
                owner=owner,
                donation_rate_bps=account.donation_rate_bps,
                total_donated=account.total_donated + amount,
                pool_balance=account.pool_balance + amount,
            )
        )
        await tx.ledger.set_total_pool_balance(pool.total_pool_balance + amount)

        certificate = await tx.ledger.create_certificate(owner, amount, tx_id=tx.tx_id)

        await tx.emit(
            EventTypes.DONATION,
            EntityKind.IMPACT_POOL,
            owner,
            {
                "donor": owner,
                "amount": str(amount),
                "total_pool_balance": str(pool.total_pool_balance + amount),
            },
        )
        await tx.emit(
            EventTypes.CERTIFICATE_CREATED,
            EntityKind.CERTIFICATE,
            str(certificate.id),
            {
                "certificate_id": certificate.id,
                "owner": owner,
                "amount": str(amount),
            },
        )

        logger.info(
            f"Donation recorded: {owner} {amount} (certificate {certificate.id})",
            extra={"tx_id": tx.tx_id},
        )
        return certificate

    # -------------------------------------------------------------------------
    # 상태 변경 연산
    # -------------------------------------------------------------------------

    async def set_donation_rate(self, caller: str, bps: int) -> None:
        """호출자의 기본 기부율 설정 (자산 이동 없음)"""
        async with self.executor.write(Operation.SET_DONATION_RATE, caller) as tx:
            owner = normalize_address(caller, "caller")
            bps = require_bps(bps, "donation_bps")

            account = await tx.ledger.get_impact_account(owner, self.default_donation_bps)
            await tx.ledger.save_impact_account(
                ImpactAccount(
                    owner=owner,
                    donation_rate_bps=bps,
                    total_donated=account.total_donated,
                    pool_balance=account.pool_balance,
                )
            )
            await tx.emit(
                EventTypes.DONATION_RATE_UPDATED,
                EntityKind.ACCOUNT,
                owner,
                {"old_bps": account.donation_rate_bps, "new_bps": bps},
            )

    async def mint_certificate(self, caller: str, certificate_id: int) -> int:
        """인증서 민팅

        Returns:
            할당된 token_id

        Raises:
            ValidationError: 인증서가 없는 경우
            StateError: 호출자가 소유자가 아닌 경우
            AlreadyDoneError: 이미 민팅된 경우
        """
        async with self.executor.write(Operation.MINT_CERTIFICATE, caller) as tx:
            owner = normalize_address(caller, "caller")
            if isinstance(certificate_id, bool) or not isinstance(certificate_id, int):
                raise ValidationError(f"certificate_id는 정수여야 합니다: {certificate_id!r}")

            certificate = await tx.ledger.get_certificate(certificate_id)
            if certificate is None:
                raise ValidationError(f"인증서가 존재하지 않습니다: {certificate_id}")
            if certificate.owner != owner:
                raise StateError(f"인증서 소유자가 아닙니다: {certificate_id}")
            if certificate.is_minted:
                raise AlreadyDoneError(
                    f"이미 민팅된 인증서입니다: {certificate_id} (token_id={certificate.token_id})"
                )

            minted = await tx.ledger.mark_certificate_minted(certificate_id)
            assert minted.token_id is not None

            await tx.emit(
                EventTypes.CERTIFICATE_MINTED,
                EntityKind.CERTIFICATE,
                str(certificate_id),
                {
                    "certificate_id": certificate_id,
                    "owner": owner,
                    "token_id": minted.token_id,
                },
            )

        return minted.token_id

    async def withdraw_from_pool(self, caller: str, amount: int) -> None:
        """본인 기부 잔액에서 인출"""
        async with self.executor.write(Operation.WITHDRAW_FROM_POOL, caller) as tx:
            owner = normalize_address(caller, "caller")
            amount = require_amount(amount)

            account = await tx.ledger.get_impact_account(owner, self.default_donation_bps)
            if amount > account.pool_balance:
                raise StateError(
                    f"풀 잔액 부족: balance={account.pool_balance}, amount={amount}"
                )

            pool = await tx.ledger.get_impact_pool()
            await tx.ledger.save_impact_account(
                ImpactAccount(
                    owner=owner,
                    donation_rate_bps=account.donation_rate_bps,
                    total_donated=account.total_donated,
                    pool_balance=account.pool_balance - amount,
                )
            )
            await tx.ledger.set_total_pool_balance(pool.total_pool_balance - amount)

            await tx.emit(
                EventTypes.POOL_WITHDRAWAL,
                EntityKind.IMPACT_POOL,
                owner,
                {"owner": owner, "amount": str(amount)},
            )

            # 외부 전송은 마지막 (실패 시 전체 롤백)
            await self.assets.transfer_out(owner, amount)

    async def donate(self, caller: str, amount: int) -> int:
        """풀에 직접 기부

        Returns:
            생성된 인증서 ID
        """
        async with self.executor.write(Operation.DONATE, caller) as tx:
            owner = normalize_address(caller, "caller")
            amount = require_amount(amount)

            state = await tx.ledger.get_vault_state()
            require_not_paused(state)

            certificate = await self.record_donation(tx, owner, amount)

            await self.assets.transfer_in(owner, amount)

        return certificate.id

    # -------------------------------------------------------------------------
    # 조회 (일시정지와 무관)
    # -------------------------------------------------------------------------

    async def get_impact_account(self, owner: str) -> ImpactAccount:
        """임팩트 계정 조회"""
        owner = normalize_address(owner, "owner")
        async with self.executor.read() as ledger:
            return await ledger.get_impact_account(owner, self.default_donation_bps)

    async def get_user_balance(self, owner: str) -> int:
        """인출 가능한 본인 기부 잔액"""
        return (await self.get_impact_account(owner)).pool_balance

    async def get_user_donation_rate(self, owner: str) -> int:
        """본인 기본 기부율 (bps)"""
        return (await self.get_impact_account(owner)).donation_rate_bps

    async def get_user_total_donated(self, owner: str) -> int:
        """누적 기부액"""
        return (await self.get_impact_account(owner)).total_donated

    async def get_total_pool_balance(self) -> int:
        """풀 전체 잔액"""
        async with self.executor.read() as ledger:
            return (await ledger.get_impact_pool()).total_pool_balance

    async def get_user_certificate_count(self, owner: str) -> int:
        """보유 인증서 수"""
        owner = normalize_address(owner, "owner")
        async with self.executor.read() as ledger:
            return await ledger.count_certificates(owner)

    async def get_user_certificates(
        self,
        owner: str,
        offset: int = 0,
        limit: int = Defaults.CERTIFICATE_PAGE_LIMIT,
    ) -> list[Certificate]:
        """보유 인증서 목록 (ID 오름차순 페이지)"""
        owner = normalize_address(owner, "owner")
        if offset < 0 or limit <= 0:
            raise ValidationError(f"잘못된 페이지 범위: offset={offset}, limit={limit}")

        async with self.executor.read() as ledger:
            return await ledger.list_certificates(owner, offset=offset, limit=limit)

    async def get_certificate(self, certificate_id: int) -> Certificate | None:
        """인증서 단건 조회"""
        async with self.executor.read() as ledger:
            return await ledger.get_certificate(certificate_id)
