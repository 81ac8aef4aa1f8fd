"""
metagen - Metadata-driven Code & SQL Generator
Copyright © 2025 Ilona Tag

This file is part of metagen.

metagen is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

metagen is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with metagen. If not, see <https://www.gnu.org/licenses/>.

Contact: <https://github.com/elevata-labs/metagen>.
"""

"""
metagen - declarative, metadata-driven generation of builder source code,
CREATE TABLE and INSERT statements from type descriptors.
"""
