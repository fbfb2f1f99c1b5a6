INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

# additive constant for each of the four 20-round stages
ROUND_CONSTANTS = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)

BLOCK_SIZE = 64
BLOCK_WORDS = BLOCK_SIZE // 4
DIGEST_SIZE = 20
LENGTH_FIELD_SIZE = 8

WORD_MASK = 0xFFFFFFFF

# bit length must fit the 64-bit length field
MAX_MESSAGE_BYTES = 1 << 61

SHA1State = tuple[int, int, int, int, int]
