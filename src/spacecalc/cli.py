from os import isatty, path
import sys
from inspect import signature as getsignature, Parameter
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import CalculatorError, InputError, format_result
from .lexer import Lexer, tokenize
from .parser import to_postfix
from .calculator import calculate
from . import space


logger = logging.getLogger(__name__)


def _transfer(transfer):
    return 'Δv1: {0:.2f} km/s | Δv2: {1:.2f} km/s | Total: {2:.2f} km/s' \
        .format(*transfer)


def _minutes(seconds):
    return '{0:.1f} minutes'.format(seconds / 60)


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.spacecalc_history'
    # A line starting with one of these continues from the last answer.
    CONTINUATIONS = '+*/^'

    # Mission formulas by name, with how to print their result.
    MISSIONS = {
        'deltav': (space.delta_v, '{0:.2f} m/s'.format),
        'orbit': (space.orbital_velocity, '{0:.2f} km/s'.format),
        'escape': (space.escape_velocity, '{0:.2f} km/s'.format),
        'hohmann': (space.hohmann_transfer, _transfer),
        'transfertime': (space.hohmann_transfer_time, _minutes),
        'gravity': (space.surface_gravity, '{0:.3f} m/s²'.format),
    }

    def dumper(self):
        '''
        Dump tokens and postfix form of each expression.
        '''
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            try:
                tokens = tokenize(line)
                print('tokens:', *tokens)
                print('postfix:', *to_postfix(tokens))
            except CalculatorError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Evaluate each expression, printing results or errors.
        '''
        last = None
        for line in self.args.expressions:
            line = line.strip()
            if not line:
                continue
            if last is not None and line[0] in self.CONTINUATIONS:
                line = last + line
            try:
                result = calculate(line, degrees=self.args.degrees)
            # Abort entire rest of line, makes sense anyway
            except CalculatorError as e:
                logger.debug('Failed on %r', line, exc_info=True)
                print(e.args[0], file=sys.stderr)
                continue
            last = format_result(result)
            print(last)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def bodies(self):
        '''
        Print celestial presets: name, mu (km³/s²), radius (km).
        '''
        for body in space.BODIES.values():
            print(body.name,
                  format_result(body.mu),
                  format_result(body.radius),
                  sep='\t')

    def _arity(self, f):
        '''
        Return number of non-default positional arguments.
        '''
        parameters = getsignature(f).parameters.values()
        return len([parameter
                    for parameter
                    in parameters
                    if parameter.kind == Parameter.POSITIONAL_OR_KEYWORD and
                       parameter.default == Parameter.empty])

    def mission(self):
        '''
        Run a mission formula on arguments, each an expression.

        With a body, its mu and radius come first.
        '''
        name, *expressions = self.args.mission
        try:
            if name.lower() not in self.MISSIONS:
                raise InputError('No such formula {0}; try one of {1}'
                                 .format(repr(name),
                                         ', '.join(sorted(self.MISSIONS))))
            formula, fmt = self.MISSIONS[name.lower()]
            args = [calculate(expression, degrees=self.args.degrees)
                    for expression
                    in expressions]
            if self.args.body:
                body = space.BODIES[self.args.body]
                args = [body.mu, body.radius] + args
            arity = self._arity(formula)
            if len(args) != arity:
                raise InputError('{0} takes {1} argument(s), got {2}'
                                 .format(name, arity, len(args)))
            print(fmt(formula(*args)))
        except CalculatorError as e:
            logger.debug('Failed on %r', self.args.mission, exc_info=True)
            print(e.args[0], file=sys.stderr)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Scientific expression calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log tokens and tracebacks')
        self.argument_parser.add_argument('-d', '--degrees',
                                          action='store_true',
                                          help='trigonometry in degrees')
        self.argument_parser.add_argument('-b', '--body',
                                          type=str.lower,
                                          choices=sorted(space.BODIES),
                                          help='mu and radius for -M')
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
                                      ('-D', '--dump', self.dumper),
                                      ('-B', '--bodies', self.bodies)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        main_groups.add_argument('-M', '--mission',
                                 nargs='+',
                                 metavar='ARG',
                                 help='formula name, then its arguments: ' +
                                      ', '.join(sorted(self.MISSIONS)))
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(format='%(levelname)s %(name)s: %(message)s')
        logging.getLogger(__package__).setLevel(
            logging.DEBUG if self.args.verbose else logging.WARNING)
        if self.args.body and not self.args.mission:
            self.argument_parser.error('-b/--body only applies to -M/--mission')
        if self.args.mission:
            self.args.action = self.mission
        if self.args.expressions is sys.stdin and \
           self.args.action in (self.executor, self.dumper):
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
