from __future__ import annotations

import json

from clprobe.core.query import QueryContext
from clprobe.core.render import LABEL_COLUMN, format_line, render_json, render_listing, render_text
from clprobe.core.walker import collect_listing, collect_report
from clprobe.infra.config import build_report_config
from clprobe.schemas.report import DeviceSection, PlatformSection, ProbeReport, ReportLine


def test_values_start_in_a_fixed_column() -> None:
    top = format_line("Number of platforms", "1", indent=0)
    nested = format_line("Device Name", "Fake GPU", indent=1)
    deeper = format_line("Denormals", "No", indent=2)
    for line, value in ((top, "1"), (nested, "Fake GPU"), (deeper, "No")):
        assert line.index(value) == LABEL_COLUMN + 2
    assert nested.startswith("  Device Name ")
    assert deeper.startswith("    Denormals ")


def test_empty_value_leaves_no_trailing_space() -> None:
    assert format_line("Device Partition", "") == "  Device Partition"


def test_text_report_layout(make_driver, make_device_props) -> None:
    config = build_report_config(raw=False)
    report = collect_report(QueryContext(make_driver(make_device_props()), config))
    lines = render_text(report, config).splitlines()
    assert lines[0].split() == ["Number", "of", "platforms", "1"]
    assert lines[1].startswith("  Platform Name")
    assert lines[1].endswith("Fake Platform")
    devices_at = lines.index(format_line("Number of devices", "1", indent=0))
    assert lines[devices_at - 1] == format_line("Platform Name", "Fake Platform")
    assert lines[devices_at + 1] == format_line("Device Name", "Fake GPU")
    assert format_line("Max clock frequency", "1500MHz") in lines
    assert format_line("Global memory size", "4294967296 (4GiB)") in lines


def test_raw_text_report_uses_symbols(make_driver, make_device_props) -> None:
    config = build_report_config(raw=True)
    report = collect_report(QueryContext(make_driver(make_device_props()), config))
    text = render_text(report, config)
    assert text.startswith(format_line("#PLATFORMS", "1", indent=0))
    assert format_line("#DEVICES", "1", indent=0) in text.splitlines()
    assert format_line("CL_DEVICE_TYPE", "CL_DEVICE_TYPE_GPU") in text.splitlines()


def test_zero_platform_report() -> None:
    config = build_report_config(raw=False)
    text = render_text(ProbeReport(platform_count=0), config)
    assert text == format_line("Number of platforms", "0", indent=0) + "\n"


def test_listing_tree(make_driver, make_device_props) -> None:
    driver = make_driver(make_device_props(name="A"), make_device_props(name="B"))
    text = render_listing(collect_listing(QueryContext(driver)))
    assert text.splitlines() == [
        "Platform #0: Fake Platform",
        " +-- Device #0: A",
        " `-- Device #1: B",
    ]


def test_json_keys_properties_by_symbol() -> None:
    report = ProbeReport(
        platform_count=1,
        platforms=[
            PlatformSection(
                name="P",
                lines=[ReportLine("Platform Name", "CL_PLATFORM_NAME", "P")],
                device_count=1,
                devices=[
                    DeviceSection(
                        lines=[
                            ReportLine("Device Name", "CL_DEVICE_NAME", "D"),
                            ReportLine(
                                "Warp",
                                "CL_DEVICE_WARP_SIZE_NV",
                                "<x:1: y : error -30>",
                                failed=True,
                            ),
                            ReportLine("Single", "CL_DEVICE_SINGLE_FP_CONFIG", "(core)"),
                            ReportLine("Denormals", "CL_FP_DENORM", "No", indent=2),
                        ]
                    )
                ],
            )
        ],
    )
    payload = json.loads(render_json(report))
    assert payload["number_of_platforms"] == 1
    platform = payload["platforms"][0]
    assert platform["properties"] == {"CL_PLATFORM_NAME": "P"}
    assert platform["number_of_devices"] == 1
    device = platform["devices"][0]
    assert device["name"] == "D"
    assert device["properties"]["CL_DEVICE_WARP_SIZE_NV"] == {"error": "<x:1: y : error -30>"}
    assert device["properties"]["CL_DEVICE_SINGLE_FP_CONFIG.CL_FP_DENORM"] == "No"


def test_icd_loader_section_ends_the_text_report(make_driver, make_device_props) -> None:
    config = build_report_config(raw=False)
    report = collect_report(QueryContext(make_driver(make_device_props()), config))
    lines = render_text(report, config).splitlines()
    title_at = lines.index("ICD loader properties")
    assert lines[title_at - 1] == ""
    assert lines[title_at - 2] != ""
    assert lines[title_at + 1:] == [
        format_line("ICD loader Name", "OpenCL ICD Loader"),
        format_line("ICD loader Vendor", "OCL Icd free software"),
        format_line("ICD loader Version", "2.3.2"),
        format_line("ICD loader Profile", "OpenCL 3.0"),
    ]


def test_offline_devices_render_after_online_devices() -> None:
    config = build_report_config(raw=False)
    report = ProbeReport(
        platform_count=1,
        platforms=[
            PlatformSection(
                name="P",
                device_count=1,
                devices=[DeviceSection(lines=[ReportLine("Device Name", "CL_DEVICE_NAME", "On")])],
                offline=ReportLine(
                    "Number of offline devices (AMD)", "#OFFDEVICES", "1", indent=0
                ),
                offline_devices=[
                    DeviceSection(lines=[ReportLine("Device Name", "CL_DEVICE_NAME", "Off")])
                ],
            )
        ],
    )
    lines = render_text(report, config).splitlines()
    assert lines[-3:] == [
        "",
        format_line("Number of offline devices (AMD)", "1", indent=0),
        format_line("Device Name", "Off"),
    ]

    payload = json.loads(render_json(report))
    platform = payload["platforms"][0]
    assert platform["number_of_offline_devices"] == 1
    assert platform["offline_devices"] == [
        {"name": "Off", "properties": {"CL_DEVICE_NAME": "Off"}}
    ]
    assert payload["icd_loader"] == {}


def test_json_carries_icd_loader_properties(make_driver, make_device_props) -> None:
    report = collect_report(QueryContext(make_driver(make_device_props())))
    payload = json.loads(render_json(report))
    assert payload["icd_loader"]["CL_ICDL_NAME"] == "OpenCL ICD Loader"
    assert payload["icd_loader"]["CL_ICDL_OCL_VERSION"] == "OpenCL 3.0"
    assert "offline_devices" not in payload["platforms"][0]
