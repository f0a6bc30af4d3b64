"""Handles interactive/command-line mode for addcalc. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Additive calculator shell. Lines starting with '/' are commands, anything else is an expression."""
    intro = "Additive calculator :: Python backend\nType '/help' for more information."
    prompt = "> "
    COMMANDS = {"/help": "help", "/vars": "vars", "/exit": "exit"}
    HELP = ("Program calculates the expressions like these: 4 + 6 - 8, 2 - 3 - 4 and so on. It supports both unary \n"
            "and binary minuses. Assign variables with 'x = 4 + 6' and use them later as in 'x - 2'. \n"
            "Enter '/exit' to terminate program. Enter '/vars' to show variables.")

    def __init__(self, sess, stdin=None):
        super().__init__(stdin=stdin)
        self.sess = sess
        self.line_num = 0

        if stdin is not None:  # replaying a file: no prompt, and error tracebacks need line numbers
            self.use_rawinput = False
            self.prompt = ""

    def cmdloop(self, intro=None):
        """Same loop as cmd.Cmd.cmdloop, except that end of input goes straight to do_EOF instead of being passed on as
        the line 'EOF', which is a valid variable name.
        """
        self.preloop()
        if intro is not None:
            self.intro = intro
        if self.intro:
            print(self.intro)

        stop = False
        while not stop:
            line = self.readline()
            if line is None:
                stop = self.do_EOF("")
            else:
                line = self.precmd(line)
                stop = self.postcmd(self.onecmd(line), line)
        self.postloop()

    def readline(self):
        """Returns the next input line without its line break, or None at end of input."""
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None

        line = self.stdin.readline()
        return line.rstrip("\r\n") if line else None

    def onecmd(self, line):
        """Dispatches /commands and evaluates anything else. cmd.Cmd's own parsing is skipped, so that words like
        'help' or 'exit' are treated as variable names.
        """
        self.line_num += 1
        line = line.strip()
        if not line:
            return self.emptyline()

        if line.startswith("/"):
            command = Shell.COMMANDS.get(line)
            if command is None:
                print("Unsupported command")
                return False
            return getattr(self, "do_" + command)("")

        return self.default(line)

    def default(self, line):
        """Evaluates an expression and prints its result."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line_num = None if self.use_rawinput else self.line_num
            print(self.sess.run(line, line_num))
        return False

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_help(self, arg):
        """Shows what the calculator can do."""
        print(Shell.HELP)
        return False

    def do_vars(self, arg):
        """Shows assigned variables."""
        print(self.sess)
        return False

    def do_EOF(self, arg):
        """Exits calculator."""
        if self.use_rawinput:
            print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits calculator."""
        print("Bye!")
        return True
