import pytest

from build_config import reset_to_default_config

# EIP-55 reference vectors: (lowercase input, checksummed form)
CHECKSUM_VECTORS = [
    ("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed", "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"),
    ("0xfb6916095ca1df60bb79ce92ce3ea74c37c5d359", "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"),
    ("0xdbf03b407c01e7cd3cbea99509d93f8dddc8c6fb", "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"),
    ("0xd1220a0cf47c7b9be7a2e6ba89f429762e7b9adb", "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"),
    ("0x52908400098527886e0f7030069857d2e4169ee7", "0x52908400098527886E0F7030069857D2E4169EE7"),
    ("0x8617e340b3d01fa5f11f306f4090fd50e238070d", "0x8617E340B3D01FA5F11F306F4090FD50E238070D"),
    ("0xde709f2102306220921060314715629080e2fb77", "0xde709f2102306220921060314715629080e2fb77"),
    ("0x27b1fdb04752bbc536007a920d24acb045561c26", "0x27b1fdb04752bbc536007a920d24acb045561c26"),
]

ADDRESSES = [checksum for _, checksum in CHECKSUM_VECTORS]
ADDR_A, ADDR_B, ADDR_C, ADDR_D = ADDRESSES[:4]


@pytest.fixture(autouse=True)
def default_build_config():
    """Every test starts from the default global configuration."""
    yield reset_to_default_config()
    reset_to_default_config()


@pytest.fixture
def voters_csv_text():
    """Header, three valid voters, one malformed line and one duplicate."""
    return "\n".join([
        "address,name,email",
        f"{ADDR_A},Alice,alice@example.com",
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAe,Broken",
        f"{ADDR_B},Bob",
        f"{ADDR_A.lower()},Alice Again,other@example.com",
        ADDR_C,
        "",
    ])


@pytest.fixture
def voters_csv(tmp_path, voters_csv_text):
    path = tmp_path / "voters.csv"
    path.write_text(voters_csv_text, encoding="utf-8")
    return path
