import logging

import regex

from .util import ErrorKind, format_number
from .calculator import try_calculate


log = logging.getLogger(__name__)


class CalcBot:
    '''
    Chat calculator bot, minus the chat.

    Takes plain message text and returns the reply text. Whatever connects
    it to a chat room is expected to send greet() on joining and respond()
    to every message.
    '''

    DEFAULTS = {
        'greeting': '###Hello! I am Calc bot.\n'
                    'Type:\n'
                    '`calc ...` to evaluate an arithmetic expression.\n'
                    'Use `()*/+-^.` symbols and digits only in expression.',
        'result_format': '>@{user}: {text}\n\n$${expression}={result}$$',
        'error_format': '>@{user}: {text}\n\n$${expression}$$ - {message}',
        'invalid_symbols_message': 'invalid symbols used in expression',
        'invalid_expression_message': 'invalid arithmetic expression',
        'allow_invalid': False,
    }

    # (name, pattern); group 1 is the expression.
    LISTENERS = (
        ('calc', regex.compile(r'^calc (.+)')),
    )

    def __init__(self, config=None):
        '''
        Create bot.

        :param config: Overrides for DEFAULTS. Unknown keys raise ValueError.
        '''
        config = dict(config or {})
        unknown = config.keys() - type(self).DEFAULTS.keys()
        if unknown:
            raise ValueError('Unknown bot option(s): {0}'
                             .format(', '.join(sorted(unknown))))
        self.config = dict(type(self).DEFAULTS, **config)

    def greet(self):
        '''
        Return greeting message, or None if disabled.
        '''
        return self.config['greeting'] or None

    def respond(self, user, text):
        '''
        Return reply to message text sent by user, or None if not for us.
        '''
        for name, pattern in type(self).LISTENERS:
            match = pattern.match(text)
            if match is not None:
                return self._calc(name, user, text, match.group(1))
        return None

    def _calc(self, name, user, text, expression):
        result = try_calculate(expression,
                               allow_invalid=self.config['allow_invalid'])
        if result.error is None:
            formatted = format_number(result.value)
            log.info('%s: %s=%s', name, expression, formatted)
            return self.config['result_format'].format(user=user,
                                                       text=text,
                                                       expression=expression,
                                                       result=formatted)
        message = self._message(result.error)
        log.info('%s: %s - %s', name, expression, message)
        return self.config['error_format'].format(user=user,
                                                  text=text,
                                                  expression=expression,
                                                  message=message)

    def _message(self, error):
        '''
        Map error to the user visible message.
        '''
        if error.kind is ErrorKind.UNEXPECTED_TOKEN:
            return self.config['invalid_symbols_message']
        return '{0} ({1})'.format(self.config['invalid_expression_message'],
                                  error.args[0])
