# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Import stages, in the order the pipeline runs them:
# seed: Chromium DOM key names and values create the entries
# platform codes: Windows, GTK and Android headers add aliases by name
# Apple: macOS and iOS codes come in through the physical keys
# derived: Fuchsia codes are computed from what is already attached
