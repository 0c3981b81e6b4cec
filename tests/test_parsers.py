from ipextract.models import InterfaceRecord
from ipextract.parsers import (
    iter_blocks, split_blocks, parse_interface, parse_all, parse,
)


WLP_BLOCK = """\
wlp2s0: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500
        inet 192.168.1.5  netmask 255.255.255.0  broadcast 192.168.1.255
        ether aa:bb:cc:dd:ee:ff
"""


# ── Block splitter ──────────────────────────────────────────────────────

def test_split_empty_input():
    assert split_blocks("") == []
    assert split_blocks("\n\n  \n") == []


def test_split_is_lazy():
    blocks = iter_blocks("a: x\n  y\nb: z\n")
    assert next(blocks) == "a: x\n  y"
    assert next(blocks) == "b: z"


def test_split_keeps_source_order(linux_output):
    blocks = split_blocks(linux_output)
    assert [b.split(":", 1)[0] for b in blocks] == ["lo", "wlan0", "eth0"]


def test_split_emits_trailing_block_without_newline():
    blocks = split_blocks("eth0: flags=1\n        inet 10.0.0.1")
    assert blocks == ["eth0: flags=1\n        inet 10.0.0.1"]


def test_split_without_blank_separators(macos_output):
    blocks = split_blocks(macos_output)
    assert len(blocks) == 2
    assert blocks[1].startswith("en0:")
    assert "status: active" in blocks[1]


def test_split_blank_line_inside_block_does_not_end_it():
    blocks = split_blocks("eth0: flags=1\n\n        inet 10.0.0.1\n")
    assert len(blocks) == 1
    assert "inet 10.0.0.1" in blocks[0]


def test_split_leading_indented_lines_form_their_own_block():
    blocks = split_blocks("   stray line\neth0: flags=1\n")
    assert blocks == ["   stray line", "eth0: flags=1"]


# ── Record parser ───────────────────────────────────────────────────────

def test_parse_reference_block():
    assert parse_interface(WLP_BLOCK) == InterfaceRecord(
        name="wlp2s0",
        inet="192.168.1.5",
        mac="aa:bb:cc:dd:ee:ff",
        netmask="255.255.255.0",
        broadcast="192.168.1.255",
    )


def test_parse_is_idempotent():
    assert parse_interface(WLP_BLOCK) == parse_interface(WLP_BLOCK)


def test_parse_alias():
    assert parse is parse_interface


def test_name_is_token_before_first_colon():
    record = parse_interface("veth9a1b: flags=4163<UP>  mtu 1500\n")
    assert record.name == "veth9a1b"


def test_alias_interface_name_stops_at_first_colon():
    record = parse_interface("eth0:1: flags=4163<UP>  mtu 1500\n")
    assert record.name == "eth0"


def test_missing_netmask_is_empty():
    block = "eth0: flags=4163<UP>  mtu 1500\n        inet 10.0.0.2  broadcast 10.0.0.255\n"
    record = parse_interface(block)
    assert record.netmask == ""
    assert record.inet == "10.0.0.2"
    assert record.broadcast == "10.0.0.255"


def test_header_only_block_has_only_a_name():
    record = parse_interface("tun0: flags=4305<UP,POINTOPOINT>  mtu 1500")
    assert record == InterfaceRecord(name="tun0")


def test_ipv6_never_fills_inet():
    block = (
        "wg0: flags=209<UP,POINTOPOINT>  mtu 1420\n"
        "        inet6 fd00::2  prefixlen 64\n"
        "        inet fd00::3\n"
    )
    assert parse_interface(block).inet == ""


def test_first_ipv4_wins():
    block = (
        "eth0: flags=4163<UP>  mtu 1500\n"
        "        inet 10.0.0.1  netmask 255.255.255.0\n"
        "        inet 10.0.0.2  netmask 255.255.0.0\n"
    )
    record = parse_interface(block)
    assert record.inet == "10.0.0.1"
    assert record.netmask == "255.255.255.0"


def test_unexpected_tokens_are_ignored():
    block = (
        "eth0: flags=4163<UP>  mtu 1500\n"
        "        frobnicate 7 inet\n"
        "        ether\n"
    )
    assert parse_interface(block) == InterfaceRecord(name="eth0")


def test_empty_or_garbage_never_raises():
    assert parse_interface("") == InterfaceRecord(name="")
    assert parse_interface("   \n\t\n") == InterfaceRecord(name="")
    assert parse_interface(":::").name == ""


def test_indented_block_has_no_name():
    record = parse_interface("        inet 10.0.0.9  netmask 255.0.0.0")
    assert record.name == ""
    assert record.inet == "10.0.0.9"


def test_indented_header_still_named():
    record = parse_interface(
        "    wlp2s0: flags=4163<UP>  mtu 1500\n        inet 192.168.1.5\n"
    )
    assert record.name == "wlp2s0"
    assert record.inet == "192.168.1.5"


def test_header_without_colon_has_no_name():
    assert parse_interface("tun0 flags 4305\n    inet 10.8.0.1").name == ""


def test_legacy_net_tools_dialect(legacy_output):
    eth0, lo = parse_all(legacy_output)
    assert eth0 == InterfaceRecord(
        name="eth0",
        inet="10.1.1.1",
        mac="00:1a:2b:3c:4d:5e",
        netmask="255.255.255.0",
        broadcast="10.1.1.255",
    )
    assert lo == InterfaceRecord(name="lo", inet="127.0.0.1", netmask="255.0.0.0")


def test_macos_hex_netmask(macos_output):
    lo0, en0 = parse_all(macos_output)
    assert lo0.netmask == "255.0.0.0"
    assert en0 == InterfaceRecord(
        name="en0",
        inet="10.0.0.7",
        mac="a4:83:e7:00:00:01",
        netmask="255.255.255.0",
        broadcast="10.0.0.255",
    )


def test_parse_all_linux(linux_output):
    records = parse_all(linux_output)
    assert [r.name for r in records] == ["lo", "wlan0", "eth0"]
    lo, wlan0, eth0 = records
    assert lo.mac == ""
    assert wlan0.inet == "192.168.1.5"
    assert eth0.inet == ""
    assert eth0.mac == "00:11:22:33:44:55"
