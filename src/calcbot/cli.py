from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import CalcError, format_number
from .machine import Machine
from .lexer import Lexer
from .bot import CalcBot


log = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator and its chat bot.
    '''

    DEFAULT_PROMPT = '> '
    LOG_FORMAT = '%(asctime)s %(name)-14s %(levelname)-7s %(message)s'

    def dumper(self):
        '''
        Dump all tokens: kind, value, and position.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(value)>\t<position>')
        for line in self.args.expressions:
            try:
                for token in lexer.lex(line.rstrip('\n')):
                    print(token.kind.name,
                          repr(token.value),
                          token.position,
                          sep='\t')
            except CalcError as e:
                self._report(e)

    def executor(self):
        '''
        Evaluate each expression, printing its result.
        '''
        machine = Machine(allow_invalid=self.args.allow_invalid)
        lexer = Lexer()
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            # One bad expression doesn't stop the rest
            try:
                print(format_number(machine.evaluate(lexer.lex(line))))
            except CalcError as e:
                self._report(e)

    def chatter(self):
        '''
        Feed each line to the bot as a chat message, printing replies.
        '''
        bot = CalcBot({'allow_invalid': self.args.allow_invalid})
        greeting = bot.greet()
        if greeting is not None:
            print(greeting)
        for line in self.args.expressions:
            reply = bot.respond(self.args.bot, line.rstrip('\n'))
            if reply is not None:
                print(reply)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _report(self, error):
        log.debug('%s failed', error.kind.value, exc_info=error)
        print(error.args[0], file=stderr)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Infix calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('--allow-invalid',
                                          action='store_true',
                                          help='permit infinite and nan '
                                               'results')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        main_groups.add_argument('-b', '--bot',
                                 metavar='USERNAME',
                                 help='treat input as chat messages from '
                                      'USERNAME')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format=self.LOG_FORMAT,
                            datefmt='%H:%M:%S')
        if self.args.bot is not None:
            self.args.action = self.chatter
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
