"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path

import pytest

from uxdash.models.config import AnalyzerConfig
from uxdash.models.test_metadata import (
    Assertion,
    CoverageMatrix,
    Selector,
    TestCoverage,
    TestMetadata,
)


# ============================================================================
# Source Fixtures
# ============================================================================


LOGIN_SPEC = """import { test, expect } from '@playwright/test';

test.describe("Login flow", () => {
  test("submits the form", async ({ page }) => {
    await page.getByTestId("submit").click();
    expect(x).toBe(true);
    expect(y).toBe(true);
  });
});
"""

DASHBOARD_SPEC = """/**
 * Dashboard smoke checks
 * @area Dashboard
 */
import { test, expect } from '@playwright/test';
import { DashboardPage } from './pages/dashboard';

test.describe('Dashboard', () => {
  test('shows widgets', async ({ page }) => {
    await page.goto('/dashboard', { timeout: 5000 });
    await page.locator('.widget').first();
    await page.click('#refresh');
    await page.fill("//input[@name=q]", 'user');
    await page.getByRole('button', { name: 'Save' });
    await expect(page.getByText('Welcome')).toBeVisible();
    await page.waitForSelector('.loaded', { timeout: 10000 });
    await page.screenshot({ path: 'dashboard.png' });
  });
});
"""

PLAIN_MODULE = """export function add(a, b) {
  return a + b;
}
"""


@pytest.fixture
def login_spec_text() -> str:
    return LOGIN_SPEC


@pytest.fixture
def dashboard_spec_text() -> str:
    return DASHBOARD_SPEC


@pytest.fixture
def plain_module_text() -> str:
    return PLAIN_MODULE


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def make_file():
    """Write a text file, creating parent directories."""
    return write_file


@pytest.fixture
def test_tree(tmp_path: Path) -> Path:
    """A small project with a resolvable test root.

    tmp_path/
      project/tests/            <- root
        login.spec.ts
        plain.test.js            (no declarations, Unbekannt)
        helpers.ts               (not a test file)
        e2e/dashboard.spec.ts
        node_modules/pkg/ignored.spec.ts
    """
    root = tmp_path / "project" / "tests"
    write_file(root / "login.spec.ts", LOGIN_SPEC)
    write_file(root / "plain.test.js", PLAIN_MODULE)
    write_file(root / "helpers.ts", "export const x = 1;\n")
    write_file(root / "e2e" / "dashboard.spec.ts", DASHBOARD_SPEC)
    write_file(root / "node_modules" / "pkg" / "ignored.spec.ts", LOGIN_SPEC)
    return root


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def analyzer_config(tmp_path: Path) -> AnalyzerConfig:
    return AnalyzerConfig(
        candidate_dirs=[str(tmp_path / "project" / "tests")],
        seed_dirs=[""],
        results_dir=str(tmp_path / "results"),
    )


# ============================================================================
# Metadata Fixtures
# ============================================================================


@pytest.fixture
def ui_record() -> TestMetadata:
    return TestMetadata(
        file="login.spec.ts",
        path="/repo/tests/login.spec.ts",
        name="login.spec.ts",
        title="Login flow",
        test_type="UI",
        selectors=[Selector(type="testId", value="submit", usage="locator", line=5)],
        assertions=[
            Assertion(type="toBe", condition="x", line=6),
            Assertion(type="toBe", condition="y", line=7),
        ],
        dependencies=["@playwright/test"],
        line_count=10,
        updated_at="2025-01-01T00:00:00.000Z",
        functional_areas=["Authentifizierung"],
        coverage=TestCoverage(area=["Authentifizierung"], type=["UI"]),
    )


@pytest.fixture
def sample_batch(ui_record: TestMetadata) -> list[TestMetadata]:
    return [
        ui_record,
        TestMetadata(
            file="search.test.ts",
            path="/repo/tests/search.test.ts",
            name="search.test.ts",
            title="finds products",
            test_type="Funktional",
            selectors=[
                Selector(type="css", value="#q", usage="fill", line=3),
                Selector(type="testId", value="results", line=4),
            ],
            assertions=[Assertion(type="toHaveText", condition="results", line=5)],
            updated_at="2025-01-02T00:00:00.000Z",
            coverage=TestCoverage(type=["Funktional"]),
        ),
        TestMetadata(
            file="broken.spec.ts",
            path="/repo/tests/broken.spec.ts",
            name="broken.spec.ts",
            title="broken.spec.ts",
            description="Fehler bei der Analyse",
            test_type="Unbekannt",
            updated_at="2025-01-03T00:00:00.000Z",
            coverage=TestCoverage(type=["Unbekannt"]),
            error="Permission denied",
        ),
    ]


@pytest.fixture
def sample_matrix() -> CoverageMatrix:
    return CoverageMatrix(
        areas=["UI", "Funktional", "Integration"],
        coverage={"UI": 1, "Funktional": 1, "Integration": 0},
    )


@pytest.fixture
def capture_logger() -> logging.Logger:
    """A dedicated logger for components under test, captured by caplog."""
    logger = logging.getLogger("uxdash.tests")
    logger.setLevel(logging.DEBUG)
    return logger
