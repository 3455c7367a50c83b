"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "totaltest.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Test configuration template for total-test-runner.
# Replace every <REQUIRED> placeholder before running.
# Replace <OPTIONAL> placeholders only when your setup needs them.
version: 2

cli:
  # Directory holding TotalTestFTCLI.sh/.bat, TotalTestCLI.sh/.bat and versions.xml.
  location: "<REQUIRED>"
  # linux_location: "<OPTIONAL>"
  # windows_location: "<OPTIONAL>"
  target_os: auto

# host_connections:
#   - id: "<OPTIONAL>"
#     host_port: "<OPTIONAL>"
#     code_page: "1047"
#     protocol: "None"

credentials:
  - id: "<REQUIRED>"
    username: "<REQUIRED>"
    # Prefer password_env so the password stays out of the file.
    password_env: "<REQUIRED>"

# Choose exactly one step section (functional_test or unit_test).
functional_test:
  connection:
    # Choose exactly one of environment_id, connection_id or host_port.
    environment_id: "<REQUIRED>"
    # connection_id: "<OPTIONAL>"
    # host_port: "<OPTIONAL>"
  server_url: "<REQUIRED>"
  credentials_id: "<REQUIRED>"
  folder_path: "<OPTIONAL>"
  recursive: false
  upload_to_server: false
  halt_at_failure: false
  report_folder: "TTTReport"
  source_folder: "COBOL"
  sonar_version: "6"
  log_level: "INFO"
  # accounting_info: "<OPTIONAL>"
  # program_selection:
  #   json_file: "changedPrograms.json"
  # code_coverage:
  #   collect: true
  #   repository: "<OPTIONAL>"
  #   system: "<OPTIONAL>"
  #   test_id: "<OPTIONAL>"
  #   threshold: 0
  # context_variables: "<OPTIONAL>"
  # enterprise_data:
  #   host_port: "<OPTIONAL>"
  stop_if_test_fails_or_threshold_reached: true
  halt_pipeline_on_failure: true

# unit_test:
#   connection:
#     connection_id: "<REQUIRED>"
#   credentials_id: "<REQUIRED>"
#   project_folder: "<REQUIRED>"
#   test_suite: "<REQUIRED>"
#   jcl: "<REQUIRED>"
#   dataset_hlq: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML test configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder test configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Test configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
