#
# Regression Test
#
# We run all the examples in the examples/basics directory and compare
# their output with the expected output stored next to them (in the
# .out file of the same name).
#

import glob, os, sys, difflib, subprocess

class bcolors:
    OK = '\033[92m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'

def diff(s1, s2):
    s1=s1.splitlines(True)
    s2=s2.splitlines(True)
    diff=difflib.unified_diff(s1, s2)
    return ''.join(diff)

def test_basic_examples():
    failed = 0
    script_file = os.path.realpath(__file__)
    script_path = os.path.dirname(script_file)
    root_path = os.path.realpath(os.path.join(script_path, '..'))
    basics_files = os.path.join(root_path, 'examples', 'basics', '*.py')
    pyfs = sorted(glob.glob(basics_files))
    assert len(pyfs) > 0
    outfs = ['.out'.join(f.rsplit('.py', 1)) for f in pyfs]

    env = dict(os.environ)
    env['PYTHONPATH'] = os.pathsep.join(
        [root_path] + ([env['PYTHONPATH']] if env.get('PYTHONPATH') else []))
    for pyf, outf in zip(pyfs, outfs):
        r = subprocess.run([sys.executable, pyf], env=env,
                           stdout=subprocess.PIPE, universal_newlines=True)
        s1 = r.stdout

        with open(outf, "r") as f:
            s2 = f.read()

        if r.returncode == 0 and s1 == s2:
            print(bcolors.OK+"good: "+pyf+bcolors.ENDC)
        else:
            print(bcolors.FAIL+"bad: "+pyf+bcolors.ENDC)
            print(diff(s1,s2))
            failed += 1
    assert failed == 0

def test_command_line_options_are_consumed():
    script_path = os.path.dirname(os.path.realpath(__file__))
    root_path = os.path.realpath(os.path.join(script_path, '..'))
    env = dict(os.environ)
    env['PYTHONPATH'] = os.pathsep.join(
        [root_path] + ([env['PYTHONPATH']] if env.get('PYTHONPATH') else []))
    code = "import sys, evsim; print(evsim.args.debug, evsim.args.verbose, sys.argv[1:])"
    r = subprocess.run([sys.executable, '-c', code, '-vv', 'other'], env=env,
                       stdout=subprocess.PIPE, universal_newlines=True)
    assert r.returncode == 0
    assert r.stdout == "True False ['other']\n"

if __name__ == '__main__':
    test_basic_examples()
