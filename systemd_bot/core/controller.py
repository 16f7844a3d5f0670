import logging
import subprocess

logger = logging.getLogger(__name__)


class ServiceController:
    """Thin wrapper around ``systemctl`` for the controllable services.

    Process failures never raise: ``start``/``stop`` return ``(output, ok)``
    and ``status`` reports an error string per service.
    """

    def __init__(self, systemctl="systemctl", use_sudo=False, timeout=30):
        self.systemctl = systemctl
        self.use_sudo  = use_sudo
        self.timeout   = timeout

    def _cmd(self, *args):
        prefix = ["sudo", "-n"] if self.use_sudo else []
        return prefix + [self.systemctl, *args]

    def _run(self, *args):
        return subprocess.run(self._cmd(*args),
                              capture_output=True, text=True, timeout=self.timeout)

    def status(self, names):
        """Query every service with a single ``systemctl is-active`` call."""
        names = list(names)
        if not names:
            return {}
        try:
            r = self._run("is-active", *names)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("systemctl is-active failed: %s", e)
            return {n: f"error: {e}" for n in names}
        # is-active exits non-zero when any unit is inactive; stdout still has one line per unit
        lines = r.stdout.strip().splitlines()
        return {n: (lines[i].strip() if i < len(lines) else "unknown")
                for i, n in enumerate(names)}

    def start(self, name):
        return self._action("start", name)

    def stop(self, name):
        return self._action("stop", name)

    def _action(self, action, name):
        logger.info("systemctl %s %s", action, name)
        try:
            r = self._run(action, name)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("systemctl %s %s failed: %s", action, name, e)
            return str(e), False
        output = (r.stdout + r.stderr).strip()
        if r.returncode == 0:
            return output, True
        return output or f"Error: {action} {name} (exit code {r.returncode})", False
