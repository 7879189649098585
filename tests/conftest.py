"""Shared pytest fixtures for all test modules."""

import os
import stat
import subprocess
import sys
from types import SimpleNamespace

import pytest
import yaml


PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))

# Shape of `gcloud compute ssh --tunnel-through-iap --dry-run` output
GCLOUD_SSH_LINE = (
    "/usr/bin/ssh -t -i /home/tester/.ssh/google_compute_engine"
    " -o CheckHostIP=no -o HashKnownHosts=no -o HostKeyAlias=compute.4242"
    " -o IdentitiesOnly=yes -o StrictHostKeyChecking=no"
    " -o UserKnownHostsFile=/home/tester/.ssh/google_compute_known_hosts"
    " -o ProxyCommand='/usr/bin/python3 -S /opt/gcloud/lib/gcloud.py compute start-iap-tunnel"
    " vm1 %p --listen-on-stdin --project=my-proj --zone=us-central1-a --verbosity=warning'"
    " -o ProxyUseFdpass=no tester@compute.4242"
)


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def run_cli(project_root):
    """Return a callable that invokes the iapssh CLI as a subprocess."""

    def _run(*args, env=None):
        result = subprocess.run(
            [sys.executable, "-m", "iapssh.iapssh", *args],
            capture_output=True,
            text=True,
            cwd=project_root,
            env=env,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


@pytest.fixture
def fake_gcloud(tmp_path):
    """Return a factory that puts a stub `gcloud` first on PATH.

    The stub records its arguments in `calls` and prints the given stdout,
    or runs stdout_cmd instead when raw bytes are needed.
    The returned env also points HOME at a fresh directory and sets USER.
    """

    def _make(stdout=GCLOUD_SSH_LINE, stderr="", exit_code=0, stdout_cmd=None):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        home = tmp_path / "home"
        home.mkdir(exist_ok=True)
        calls = tmp_path / "gcloud_calls.txt"

        script = bin_dir / "gcloud"
        if stdout_cmd is None:
            stdout_cmd = f"cat <<'GCLOUD_EOF'\n{stdout}\nGCLOUD_EOF"
        script.write_text(
            "#!/bin/sh\n"
            f"echo \"$@\" >> '{calls}'\n"
            f"{stdout_cmd}\n"
            "cat >&2 <<'GCLOUD_EOF'\n"
            f"{stderr}\n"
            "GCLOUD_EOF\n"
            f"exit {exit_code}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

        env = dict(os.environ)
        env["PATH"] = f"{bin_dir}{os.pathsep}{env.get('PATH', '')}"
        env["HOME"] = str(home)
        env["USER"] = "tester"
        env["IAPSSH_DEFAULTS"] = str(tmp_path / "no-defaults.yaml")
        return SimpleNamespace(env=env, home=home, calls=calls)

    return _make


@pytest.fixture
def make_defaults_file(tmp_path):
    """Return a factory that writes a temporary defaults YAML file."""

    def _make(values):
        path = tmp_path / "iapssh.yaml"
        with open(path, "w") as f:
            yaml.dump(values, f)
        return str(path)

    return _make
