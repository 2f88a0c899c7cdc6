"""
Output Format Constants
Chua cac constants quy dinh layout cua document dau ra (tree listing + file blocks).
"""

# Dong dau tien cua tree listing, dai dien cho thu muc goc
TREE_ROOT_MARKER = "."

# Moi cap depth thut vao 2 spaces, roi den branch marker
TREE_INDENT = "  "
TREE_BRANCH = "├── "

# Ngan cach giua tree listing va phan noi dung
SECTION_SEPARATOR = "\n\n"

# Dong ke tren/duoi header cua moi file block
BLOCK_DELIMITER = "-" * 50

# Ngan cach giua so dong va noi dung dong
LINE_NUMBER_SEPARATOR = " | "

# Placeholder khi file khong doc duoc (binary, permission, I/O)
UNREADABLE_PLACEHOLDER = "[Error: could not read file. It may be binary.]"
