"""
Source colors and terminal string building
"""

import logging
from collections import namedtuple

log = logging.getLogger()

Color = namedtuple('Color', ['long', 'escape'])

esc = '\x1b['


def build_colors():
    """generate dict of Color objects for terminal"""
    dark_colors = ['black', 'darkred', 'darkgreen', 'brown', 'darkblue',
                   'purple', 'teal', 'lightgray']
    light_colors = ['darkgray', 'red', 'green', 'yellow', 'blue',
                    'fuchsia', 'turquoise', 'white']

    codes = {
        'reset': esc + '39;49;00m',
    }

    for x, (d, l) in enumerate(zip(dark_colors, light_colors), 30):
        codes[d] = esc + '%im' % x
        codes[l] = esc + '%i;01m' % x

    # aliases
    codes['darkyellow'] = codes['brown']
    codes['magenta'] = codes['purple']
    codes['cyan'] = codes['teal']

    return {name: Color(name, code) for name, code in codes.items()}


color_lookup = build_colors()
Plain = Color('plain', '')
Reset = color_lookup['reset']
Green = color_lookup['darkgreen']
Cyan = color_lookup['cyan']
Yellow = color_lookup['darkyellow']
Blue = color_lookup['darkblue']
Red = color_lookup['darkred']
Magenta = color_lookup['magenta']

# order sources are colored in, by position on the command line
palette = [Green, Cyan, Yellow, Blue, Red, Magenta]


def pick_color(index, colors=None):
    """color for the source at index, cycling when sources outnumber colors"""
    colors = colors or palette
    return colors[index % len(colors)]


def colorize(text, color):
    """wrap text in the color escape, Plain leaves it untouched"""
    if not color.escape:
        return text
    return color.escape + text + Reset.escape
