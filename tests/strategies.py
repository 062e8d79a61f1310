# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from hypothesis import strategies as st

from modern_syslog.constants import FACILITIES, LEVELS, Facility, Level


levels = st.sampled_from(list(Level))

level_codes = st.integers(min_value=0, max_value=7)

facilities = st.sampled_from(list(Facility))

masks = st.integers(min_value=0, max_value=0xFF)

unknown_names = st.text(min_size=1, max_size=20).filter(
    lambda n: n not in LEVELS and n not in FACILITIES
)

# Anything that print() will keep on a single line.
messages = st.text(
    alphabet=st.characters(exclude_categories=("Cc", "Cs", "Zl", "Zp")),
    min_size=1,
    max_size=100,
)


@st.composite
def priorities(draw):
    return int(draw(facilities)) | int(draw(levels))
