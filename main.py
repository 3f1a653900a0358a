import sys

from rich.pretty import pprint

from flagset import *

if __name__ == '__main__':
    args = (
        ArgumentSet.from_argv(len(sys.argv), sys.argv)
        .set_name("greet")
        .set_about("Say hello to someone.")
        .set_version("0.0.1")
        .add_argument(Argument.with_name("name").set_short("n").set_long("name").expects_value().required())
        .add_argument(Argument.with_name("verbose").set_short("v").set_long("verbose"))
        .parse()
    )
    pprint(args)
    print(f"hello, {args.get('name')}{'!' if args.is_given('verbose') else ''}")
