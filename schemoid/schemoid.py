"""

Command line utility to convert JSON schema documents to Mongoid document classes.

"""


import argparse
import json
import logging
import os
import sys
import tempfile

from schemoid import _version

logger = logging.getLogger(__name__)

ARG_TYPES = {'str': str, 'int': int, 'bool': bool}


def load_commands():
    """Load the commands from the commands.json file."""
    commands_path = os.path.join(os.path.dirname(__file__), 'commands.json')
    with open(commands_path, 'r', encoding='utf-8') as f:
        return json.load(f)

def create_subparsers(subparsers, commands):
    """Create subparsers for the commands."""
    for command in commands:
        cmd_parser = subparsers.add_parser(command['command'], help=command['description'])
        for arg in command['args']:
            kwargs = {
                'type': ARG_TYPES[arg['type']],
                'help': arg['help'],
            }

            if 'nargs' in arg:
                kwargs['nargs'] = arg['nargs']
            if 'choices' in arg:
                kwargs['choices'] = arg['choices']
            if 'default' in arg:
                kwargs['default'] = arg['default']
            if arg['type'] == 'bool':
                kwargs['action'] = 'store_true'
                del kwargs['type']
            carg = cmd_parser.add_argument(arg['name'], **kwargs)
            carg.required = arg.get('required', True)

def dynamic_import(module, func):
    """Dynamically import a module and function."""
    mod = __import__(module, fromlist=[func])
    return getattr(mod, func)

def resolve_function_args(command, args, input_file_path, output_file_path):
    """Map the parsed arguments onto the keyword arguments of the command function."""
    func_args = {}
    for arg, val in command['function']['args'].items():
        if val == 'input_file_path':
            func_args[arg] = input_file_path
        elif val == 'output_file_path':
            if output_file_path:
                func_args[arg] = output_file_path
        elif val.startswith('not args.'):
            func_args[arg] = not getattr(args, val[9:], False)
        elif val.startswith('args.'):
            if getattr(args, val[5:], None) is not None:
                func_args[arg] = getattr(args, val[5:])
        else:
            func_args[arg] = val
    return func_args

def main():
    """Main function for the command line utility."""
    commands = load_commands()
    parser = argparse.ArgumentParser(description='Convert JSON schema documents to Mongoid document classes.')
    parser.add_argument('--version', action='store_true', help='Print the version of Schemoid.')
    parser.add_argument('--verbose', action='store_true', help='Log the conversion steps.')

    subparsers = parser.add_subparsers(dest='command')
    create_subparsers(subparsers, commands)

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if getattr(args, 'verbose', False) else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    if getattr(args, 'version', False):
        print(f'Schemoid {_version.version}')
        return

    if args.command is None:
        parser.print_help()
        return

    temp_input = None
    try:
        command = next((cmd for cmd in commands if cmd['command'] == args.command), None)
        if not command:
            logger.error("Command %s not found.", args.command)
            sys.exit(1)

        input_file_path = getattr(args, 'input', None)
        if input_file_path is None:
            temp_input = tempfile.NamedTemporaryFile(delete=False, mode='w', encoding='utf-8', suffix='.json')
            input_file_path = temp_input.name
            temp_input.write(sys.stdin.read())
            temp_input.flush()
            temp_input.close()
            if not getattr(args, 'schema_name', None):
                args.schema_name = 'schema'

        temp_output = None
        output_file_path = ''
        if 'out' in args:
            output_file_path = args.out
            if output_file_path is None:
                temp_output = tempfile.NamedTemporaryFile(delete=False)
                temp_output.close()
                output_file_path = temp_output.name

        module_name, func_name = command['function']['name'].rsplit('.', 1)
        func = dynamic_import(module_name, func_name)
        func_args = resolve_function_args(command, args, input_file_path, output_file_path)
        logger.info('Executing %s with input %s and output %s', command['description'], input_file_path, output_file_path)
        func(**func_args)

        if temp_output:
            with open(output_file_path, 'r', encoding='utf-8') as f:
                sys.stdout.write(f.read())
            os.remove(output_file_path)

    except Exception as e:  # pylint: disable=broad-except
        logger.error("Error: %s", e)
        sys.exit(1)
    finally:
        if temp_input:
            try:
                os.remove(temp_input.name)
            except OSError as e:
                logger.warning("Could not delete temporary input file %s. %s", temp_input.name, e)

if __name__ == "__main__":
    main()
