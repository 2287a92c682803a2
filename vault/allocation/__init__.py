"""
자본 배분 패키지
"""

from vault.allocation.allocator import CapitalAllocator, allocation_cap

__all__ = ["CapitalAllocator", "allocation_cap"]
