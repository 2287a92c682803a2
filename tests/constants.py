"""
테스트 공용 상수

주소는 소문자 정규형, 금액은 최소 단위(wei) 정수
"""

OWNER = "0x" + "11" * 20
AGENT = "0x" + "22" * 20
USER_A = "0x" + "aa" * 20
USER_B = "0x" + "bb" * 20
WALLET = "0x" + "cc" * 20
FEE_RECIPIENT = "0x" + "fe" * 20

# 1 토큰 (18 decimals)
TOKEN = 10**18
