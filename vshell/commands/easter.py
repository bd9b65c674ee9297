"""Hidden fun: sudo, cowsay, matrix, hack, neofetch, sl, fortune, exit."""

from ..result import MATRIX, CommandResult
from .registry import builtin

SUDO_DENIALS = (
    "Nice try! This terminal doesn't have root access.",
    "Permission denied: Guest users cannot sudo.",
    "[sudo] password for guest: \nSorry, try again.\n"
    "[sudo] password for guest: \nSorry, try again.\n"
    "[sudo] password for guest: \nsudo: 3 incorrect password attempts",
    "sudo: you must be sudoer to use sudo. This incident will be reported.",
    "We trust you have received the usual lecture from the local System\n"
    "Administrator. It usually boils down to these three things:\n\n"
    "    #1) Respect the privacy of others.\n"
    "    #2) Think before you type.\n"
    "    #3) With great power comes great responsibility.\n\n"
    "[sudo] password for guest: \nPermission denied.",
)

FORTUNES = (
    '"The only truly secure system is one that is powered off, cast in a block of concrete '
    'and sealed in a lead-lined room with armed guards." - Gene Spafford',
    '"Hackers are breaking the systems for profit. Before, it was about intellectual curiosity '
    'and pursuit of knowledge and thrill, and now hacking is big business." - Kevin Mitnick',
    '"The best way to predict the future is to invent it." - Alan Kay',
    '"In God we trust. All others must bring data." - W. Edwards Deming',
    '"Security is not a product, but a process." - Bruce Schneier',
    '"There are two types of encryption: one that will prevent your sister from reading your '
    'diary and one that will prevent your government." - Bruce Schneier',
    '"A good programmer is someone who always looks both ways before crossing a one-way '
    'street." - Doug Linder',
    '"It\'s not a bug, it\'s an undocumented feature." - Anonymous',
    '"The quieter you become, the more you are able to hear." - Kali Linux motto',
    '"Always code as if the person who ends up maintaining your code is a violent psychopath '
    'who knows where you live." - John Woods',
    '"There is no patch for human stupidity." - Anonymous',
    '"If you think technology can solve your security problems, then you don\'t understand the '
    'problems and you don\'t understand the technology." - Bruce Schneier',
    '"The Internet is not a truck. It\'s a series of tubes." - Ted Stevens (just kidding!)',
    '"To err is human, but to really foul things up you need a computer." - Paul R. Ehrlich',
    '"Some people have a way with words, and other people...oh, not have way." '
    '- Steve Martin (Wait, wrong quote)',
)

EXIT_MESSAGES = (
    "You can check out any time you like, but you can never leave...\n\n"
    "(This is a web terminal - just close the tab if you want to leave!)",
    "Exit? There is no exit in the Matrix.\n\nTry 'clear' to reset the terminal instead.",
    "Exiting would be too easy. Try exploring more commands!\n\n"
    "Hint: Type 'help' for available commands.",
    "404: Exit not found.\n\nThis terminal doesn't have an exit. But feel free to explore!",
    "You've been trapped in the cyber realm!\n\n"
    "Just kidding - you can close this tab anytime.",
)

MATRIX_TEXT = ('\n[MATRIX MODE ACTIVATED]\n\nThe Matrix has you...\n'
               'Follow the white rabbit.\n\nPress any key to continue...\n')

COW = r"""
 {border}
< {message} >
 {border}
        \   ^__^
         \  (oo)\_______
            (__)\       )\/\
                ||----w |
                ||     ||
    """

HACK = """
[*] Initializing hack sequence...
[*] Target: {target}
[*] Loading exploit modules...

[+] Bypassing firewall...................[OK]
[+] Cracking encryption..................[OK]
[+] Injecting payload....................[OK]
[+] Establishing backdoor................[OK]
[+] Covering tracks......................[OK]

[!] ACCESS GRANTED

    ██╗  ██╗ █████╗  ██████╗██╗  ██╗███████╗██████╗
    ██║  ██║██╔══██╗██╔════╝██║ ██╔╝██╔════╝██╔══██╗
    ███████║███████║██║     █████╔╝ █████╗  ██║  ██║
    ██╔══██║██╔══██║██║     ██╔═██╗ ██╔══╝  ██║  ██║
    ██║  ██║██║  ██║╚██████╗██║  ██╗███████╗██████╔╝
    ╚═╝  ╚═╝╚═╝  ╚═╝ ╚═════╝╚═╝  ╚═╝╚══════╝╚═════╝

[*] System compromised. You're in.
[*] Remember: With great power comes great responsibility.
    """

NEOFETCH = r"""
       ___           {login}
      /   \          -----------------
     |  o  |         OS: PortfolioOS v1.0
     |  _  |         Shell: cyber-term 2.0
      \_|_/          Theme: Matrix Hacker
       | |           Terminal: Web-based
      /   \          CPU: Your Browser
     |     |         Memory: Unlimited
     |_____|         Uptime: Since page load

    System Type: Static Portfolio
    Environment: Cybersecurity Showcase
    Purpose: Demonstrate skills & projects
    Security: Sandboxed

    Packages: cat, ls, cd, grep, base64, xxd
    Hidden: Try 'help' and look under FUN
    """

TRAIN = r"""

      ====        ________                ___________
  _D _|  |_______/        \__I_I_____===__|_________|
   |(_)---  |   H\________/ |   |        =|___ ___|
   /     |  |   H  |  |     |   |         ||_| |_||
  |      |  |   H  |__--------------------| [___] |
  |  ______|___H__/__|_____/[][]~\_______|       |
  |/ |   |-----------I_____I [][] []  D   |=======|____
__/ =| o |=-~~\  /~~\  /~~\  /~~\ ____Y___________|__
 |/-=|___|=O=====O=====O=====O   |_____/~\___/
  \_/      \__/  \__/  \__/  \__/      \_/

  Oops! Did you mean 'ls'?
    """


@builtin('sudo', 'fun')
def sudo(session, args, stdin=None):
    """Run a command as root.

    Usage:
        sudo COMMAND
    """
    return CommandResult.ok(session.rng.choice(SUDO_DENIALS))


@builtin('cowsay', 'fun')
def cowsay(session, args, stdin=None):
    """ASCII cow with speech bubble.

    Usage:
        cowsay [MESSAGE...]

    Examples:
        cowsay hello
    """
    message = ' '.join(args) if args else 'Moo!'
    return CommandResult.ok(COW.format(border='-' * (len(message) + 2), message=message))


@builtin('matrix', 'fun', aliases=('cmatrix',))
def matrix(session, args, stdin=None):
    """Enter the Matrix.

    Usage:
        matrix
    """
    return CommandResult.ok(MATRIX_TEXT, MATRIX)


@builtin('hack', 'fun')
def hack(session, args, stdin=None):
    """Hollywood-style hacking sequence.

    Usage:
        hack [TARGET]

    Examples:
        hack
        hack pentagon
    """
    return CommandResult.ok(HACK.format(target=args[0] if args else 'mainframe'))


@builtin('neofetch', 'fun')
def neofetch(session, args, stdin=None):
    """Display system info.

    Usage:
        neofetch
    """
    login = f"{session.config.user}@{session.config.hostname}"
    return CommandResult.ok(NEOFETCH.format(login=login))


@builtin('sl', 'fun')
def sl(session, args, stdin=None):
    """Steam locomotive.

    Usage:
        sl
    """
    return CommandResult.ok(TRAIN)


@builtin('fortune', 'fun')
def fortune(session, args, stdin=None):
    """Print a random quote.

    Usage:
        fortune
    """
    return CommandResult.ok(f"\n{session.rng.choice(FORTUNES)}\n")


@builtin('exit', 'fun', aliases=('quit', 'logout'))
def exit(session, args, stdin=None):
    """Leave the terminal.

    Usage:
        exit
    """
    return CommandResult.ok(session.rng.choice(EXIT_MESSAGES))
