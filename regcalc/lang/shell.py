"""Handles interactive/command-line mode for regcalc interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Register calculator shell."""
    intro = "Register calculator :: Python backend\nType '?' for more information."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def cmdloop(self, intro=None):
        """Same as cmd.Cmd.cmdloop, except that only the end of input exits: a typed 'EOF' is regcalc input."""
        self.preloop()
        if intro is not None:
            self.intro = intro
        if self.intro:
            self.stdout.write(str(self.intro) + "\n")

        stop = None
        while not stop:
            line = self.readline()
            if line is None:
                stop = self.do_EOF("")
            else:
                line = self.precmd(line)
                stop = self.onecmd(line)
                stop = self.postcmd(stop, line)

        self.postloop()

    def readline(self):
        """Returns the next line of input without its line ending, or None at the end of input."""
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None

        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        return line.rstrip("\r\n") if line else None

    def onecmd(self, line):
        """Every line is regcalc input: 'print a' or 'quit' must not be dispatched to do_* methods."""
        if line.strip() == "?":
            return self.do_help(line)
        return self.default(line)

    def default(self, line):
        """Parses and executes one line of regcalc. Stops the shell once a quit instruction is executed."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.add(line, self.line_num)

            return not self.sess.run()

    def do_help(self, arg):
        """Prints a short intro to the language."""
        self.stdout.write("Welcome to the register calculator!\n\n"
                          "Registers are named with letters and digits, and start at 0. Try typing\n"
                          "'a add 5', then 'a multiply b', then 'b add 2', and finally 'print a'.\n"
                          "Registers are only evaluated when printed, so 'b' can be defined after it\n"
                          "is used: this prints 10. The operations are 'add', 'subtract' and\n"
                          "'multiply'. Type 'quit' to exit.\n")

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return True
