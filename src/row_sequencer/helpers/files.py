from pathlib import Path
import chardet

"""
File sniffing helpers used when a tabular store is read from disk.
"""

def infer_encoding(path: Path) -> str:
    with open(path, 'rb') as infile:
        detected = chardet.detect(infile.read(10000))
    encoding = detected.get('encoding') or 'utf-8'
    if encoding == 'ascii':
        encoding = 'utf-8' # utf-8 is a superset of ascii and detection flakes on short files
    return encoding

def infer_delim(path: Path, encoding: str = 'utf-8') -> str:
    with open(path, 'r', encoding=encoding) as infile:
        line = infile.readline()
        tabs = line.count('\t')
        commas = line.count(',')
        if tabs > commas:
            return '\t'
        return ','
