"""
Line-oriented command scripts.

Each non-blank line holds one command and its whitespace separated arguments.
Lines starting with ``#`` are comments. Supported commands:

- ``new-project <height> <width> [name]``
- ``load-project <path>``
- ``save-project <path>``
- ``add-layer <name>``
- ``add-image-to-layer <layer> <image-path> <x> <y>``
- ``set-filter <layer> <filter>``
- ``save-image <path>``
- ``quit`` or ``q``

Example usage::

    import io
    from collage_tools.script import ScriptRunner

    runner = ScriptRunner()
    runner.run(io.StringIO("new-project 4 4\\nadd-layer top\\nsave-image out.png\\n"))
    runner.project  # Project('untitled' size=4x4 ...)

A command that fails reports its message to the output stream and the runner
moves on to the next line.
"""
import logging
import sys

from collage_tools.api.project import Project
from collage_tools.formats import read_image, write_image

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "untitled"

QUIT_COMMANDS = ("quit", "q")


class ScriptRunner:
    """
    Execute command scripts against a single current project.

    :param output: Text stream receiving status and error messages. Defaults
        to :py:data:`sys.stdout`.
    :param project: Optional :py:class:`~collage_tools.api.project.Project`
        to start from.
    """

    def __init__(self, output=None, project=None):
        self._output = output if output is not None else sys.stdout
        self.project = project
        self._commands = {
            "new-project": (self.new_project, 2, 3),
            "load-project": (self.load_project, 1, 1),
            "save-project": (self.save_project, 1, 1),
            "add-layer": (self.add_layer, 1, 1),
            "add-image-to-layer": (self.add_image_to_layer, 4, 4),
            "set-filter": (self.set_filter, 2, 2),
            "save-image": (self.save_image, 1, 1),
        }

    def run(self, lines):
        """
        Execute commands until the input runs out or a quit command is read.

        :param lines: Iterable of text lines, such as an open file.
        :return: Number of commands that failed.
        """
        failures = 0
        for number, line in enumerate(lines, 1):
            tokens = line.split()
            if not tokens or tokens[0].startswith("#"):
                continue
            if tokens[0] in QUIT_COMMANDS:
                logger.debug("Quit at line %d" % number)
                break
            if not self.execute(tokens[0], tokens[1:]):
                failures += 1
        return failures

    def execute(self, command, args):
        """
        Execute a single command.

        :return: `True` on success, `False` if the command failed.
        """
        try:
            self._dispatch(command, args)
        except (ValueError, IndexError, OSError) as e:
            logger.debug("Command %r failed: %s" % (command, e))
            self._write("Error: %s" % e)
            return False
        return True

    def new_project(self, height, width, name=DEFAULT_PROJECT_NAME):
        self.project = Project(name, _int(height, "height"), _int(width, "width"))
        self._write("Project %r created." % name)

    def load_project(self, path):
        self.project = Project.open(path)
        self._write("Project %r loaded." % self.project.name)

    def save_project(self, path):
        self._current().save(path)
        self._write("Project saved to %s." % path)

    def add_layer(self, name):
        self._current().add_layer(name)
        self._write("Layer %r added." % name)

    def add_image_to_layer(self, layer_name, path, x, y):
        project = self._current()
        image = read_image(path, project.max_value)
        project.add_image_to_layer(layer_name, image, _int(x, "x"), _int(y, "y"))
        self._write("Image %s added to layer %r." % (path, layer_name))

    def set_filter(self, layer_name, filter):
        self._current().set_filter(filter, layer_name)
        self._write("Filter %s set on layer %r." % (filter, layer_name))

    def save_image(self, path):
        write_image(self._current().flatten(), path)
        self._write("Image saved to %s." % path)

    def _dispatch(self, command, args):
        if command not in self._commands:
            raise ValueError("Unknown command: %r" % command)
        func, minimum, maximum = self._commands[command]
        if not minimum <= len(args) <= maximum:
            raise ValueError(
                "%s expects %s arguments, got %d"
                % (
                    command,
                    minimum if minimum == maximum else "%d to %d" % (minimum, maximum),
                    len(args),
                )
            )
        func(*args)

    def _current(self):
        if self.project is None:
            raise ValueError("No project. Use new-project or load-project first.")
        return self.project

    def _write(self, message):
        self._output.write(message + "\n")


def _int(token, name):
    try:
        return int(token)
    except ValueError:
        raise ValueError("Invalid %s: %r is not an integer" % (name, token))
