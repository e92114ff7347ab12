"""Fixtures for integration tests against crates on the real file system."""

from pathlib import Path

import pytest

CARGO_TOML = """\
[package]
name = "Telemetry"
version = "0.1.0"
edition = "2021"

[lib]
crate-type = ["cdylib"]
"""

LIB_RS = """\
//! Telemetry bindings.
use std::time::Duration;

mod sensors;
mod internal;

#[derive(Debug, Clone, FFIShim)]
pub struct Reading {
    pub value: f64,
    pub taken_after: Duration,
    pub ok: bool,
}

#[ffishim_function]
pub fn latest(sensor: SensorKind) -> Result<Reading, String> {
    todo!()
}

#[ffishim_function]
pub fn history(limit: u32) -> Vec<Reading> {
    todo!()
}
"""

SENSORS_MOD_RS = """\
mod thermal;

#[derive(FFIShim)]
pub enum SensorKind {
    Thermal = 1,
    Pressure = 2,
}
"""

THERMAL_RS = """\
#[derive(FFIShim)]
#[ffishim(opaque)]
pub struct Probe {
    handle: *mut u8,
}

#[ffishim_function]
pub fn calibrate(probe: Probe, offset: Option<f32>) {}
"""

INTERNAL_RS = """\
pub(crate) struct Cache {
    entries: Vec<u64>,
}

pub fn clear() {}
"""


@pytest.fixture
def telemetry_crate(tmp_path: Path) -> Path:
    """Write a multi-file crate to disk and return its root."""
    src = tmp_path / "src"
    (src / "sensors").mkdir(parents=True)
    (tmp_path / "Cargo.toml").write_text(CARGO_TOML)
    (src / "lib.rs").write_text(LIB_RS)
    (src / "sensors" / "mod.rs").write_text(SENSORS_MOD_RS)
    (src / "sensors" / "thermal.rs").write_text(THERMAL_RS)
    (src / "internal.rs").write_text(INTERNAL_RS)
    return tmp_path
