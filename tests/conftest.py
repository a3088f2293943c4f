from pytest import fixture

from spacecalc.cli import CLI
from spacecalc.lexer import Lexer


@fixture
def lexer() -> Lexer:
    return Lexer()


@fixture
def run(capsys):
    '''
    Run the CLI on arguments, returning captured (out, err).
    '''
    def run(*args: str):
        CLI().run(args=list(args))
        return capsys.readouterr()
    return run
